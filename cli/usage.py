"""
Usage Text and Argument Helpers

The full usage screen, the short hint printed when gpio is run without
arguments, and the small helpers handlers use to check their arguments.
Every argument problem is a UsageError whose message is the usage line.
"""

from config.settings import COPYRIGHT, PROGRAM_NAME, VERSION
from core.errors import UsageError

USAGE = f"""\
Usage: {PROGRAM_NAME} -v             Show version info
       {PROGRAM_NAME} -h|-help|--help|help|h  Show Help
       {PROGRAM_NAME} [-b|-p|-w] ... Use bcm-gpio/physical/WiringPi pin numbering scheme.
                           If none specified, BCM GPIO numbering is used by default.
       {PROGRAM_NAME} -z ...        Don't touch the hardware (simulated backend)
       [-x extension:params][[ -x ...]] ...
       {PROGRAM_NAME} <mode/read/write/aread/awrite/wb/pwm/pwmTone/clock> ...
       {PROGRAM_NAME} qmode <pin>
       {PROGRAM_NAME} bank <bank>
       {PROGRAM_NAME} <toggle/blink> <pin>
       {PROGRAM_NAME} readall/allreadall
       {PROGRAM_NAME} unexportall/exports
       {PROGRAM_NAME} export/edge/unexport ...
       {PROGRAM_NAME} wfi <pin> <mode>
       {PROGRAM_NAME} mwfi <pin>[,<pin>...] <mode>
       {PROGRAM_NAME} drive <group> <value>
       {PROGRAM_NAME} pwm-bal/pwm-ms
       {PROGRAM_NAME} pwmr <range>
       {PROGRAM_NAME} pwmc <divider>
       {PROGRAM_NAME} load spi/i2c
       {PROGRAM_NAME} unload spi/i2c
       {PROGRAM_NAME} i2cd/i2cdetect
       {PROGRAM_NAME} rbx/rbd
       {PROGRAM_NAME} wb <value>
       {PROGRAM_NAME} usbp high/low"""

HINT = f"""\
{PROGRAM_NAME}:
  Format: {PROGRAM_NAME} -h for full details and
          {PROGRAM_NAME} readall for a quick printout of your connector details"""

WARRANTY = f"""\
{PROGRAM_NAME} version: {VERSION}
{COPYRIGHT}

    This program is free software; you can redistribute it and/or modify
    it under the terms of the GNU Lesser General Public License as published
    by the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU Lesser General Public License for more details.

    You should have received a copy of the GNU Lesser General Public License
    along with this program. If not, see <http://www.gnu.org/licenses/>.
"""


def usage_error(usage: str) -> UsageError:
    return UsageError(f"Usage: {PROGRAM_NAME} {usage}")


def expect_args(args: list[str], count: int, usage: str) -> None:
    """Raise the usage line unless exactly count arguments were given"""
    if len(args) != count:
        raise usage_error(usage)


def parse_number(text: str, usage: str, base: int = 10) -> int:
    """
    Integer argument, or the usage line if it isn't one.

    Args:
        text: Argument as typed
        usage: Usage line of the command
        base: 10, or 0 to accept 0x/0o/0b prefixes
    """
    try:
        return int(text, base)
    except ValueError:
        raise usage_error(usage) from None
