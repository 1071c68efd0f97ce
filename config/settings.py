"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Host paths can be overridden from the environment or a .env file, which
  is how the tests and non-Pi development machines point the tool at a
  fake /sys or /proc tree
- Import these settings in modules: from config.settings import SYSFS_GPIO_ROOT
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# PROGRAM IDENTITY
# =============================================================================

PROGRAM_NAME = "gpio"
VERSION = "3.10.0"
COPYRIGHT = "Copyright (c) 2012-2025 Gordon Henderson et al"

# Any non-empty value turns on debug logging
DEBUG_ENV_VAR = "WIRINGPI_DEBUG"

# =============================================================================
# HARDWARE BACKEND
# =============================================================================

# auto, pigpio, rpigpio or mock
GPIO_BACKEND = os.getenv("GPIO_BACKEND", "auto").lower()

# pigpiod connection (same variable names as the pigpio library itself)
PIGPIO_ADDR = os.getenv("PIGPIO_ADDR", "localhost")
PIGPIO_PORT = int(os.getenv("PIGPIO_PORT", "8888"))

# =============================================================================
# HOST PATHS
# =============================================================================

SYSFS_GPIO_ROOT = Path(os.getenv("GPIO_SYSFS_ROOT", "/sys/class/gpio"))
PROC_MODULES = Path(os.getenv("GPIO_PROC_MODULES", "/proc/modules"))
DEVICE_TREE_PATH = Path(os.getenv("GPIO_DEVICE_TREE", "/proc/device-tree"))
CPUINFO_PATH = Path(os.getenv("GPIO_CPUINFO", "/proc/cpuinfo"))
GPIOMEM_PATH = Path(os.getenv("GPIO_GPIOMEM", "/dev/gpiomem"))

# Executables are only ever looked up in these directories, in this order.
# $PATH is never consulted.
EXECUTABLE_SEARCH_PATH = (
    "/sbin",
    "/usr/sbin",
    "/bin",
    "/usr/bin",
    "/usr/local/bin",
    "/usr/local/sbin",
)

MODPROBE = "modprobe"
RMMOD = "rmmod"
I2CDETECT = "i2cdetect"

# =============================================================================
# TIMING
# =============================================================================

# Time for udev to create device nodes after a module load (seconds)
MODULE_SETTLE_TIME = 1.0

# Half period of the blink command (seconds)
BLINK_INTERVAL = 0.5

# =============================================================================
# LOGGING
# =============================================================================

LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"
