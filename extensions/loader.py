"""
Extension Loader

Turns a `-x` spec string into a loaded extension node.

    name:pinBase[:param...]

e.g. `mcp23017:100:0x20` puts a 16-pin expander at pins 100-115.
"""

import logging
from typing import Optional

from extensions.implementations.ads1115 import Ads1115Node
from extensions.implementations.mcp23017 import Mcp23017Node
from extensions.interfaces.extension_interface import ExtensionError, ExtensionNode
from hardware.constants import EXTENSION_PIN_BASE

logger = logging.getLogger(__name__)

# Extension name -> node class
EXTENSIONS: dict[str, type[ExtensionNode]] = {
    Mcp23017Node.name: Mcp23017Node,
    Ads1115Node.name: Ads1115Node,
}


def parse_extension_spec(spec: str) -> tuple[str, int, list[str]]:
    """
    Split an extension spec into name, pin base and parameters.

    Raises:
        ExtensionError: If the spec has no pin base or it is below 64
    """
    parts = spec.split(":")
    if len(parts) < 2 or not parts[0]:
        raise ExtensionError(f"Invalid extension spec '{spec}' (expected name:pinBase[:params])")

    name = parts[0].lower()
    try:
        pin_base = int(parts[1])
    except ValueError:
        raise ExtensionError(f"{name}: pinBase must be a number: {parts[1]}") from None

    if pin_base < EXTENSION_PIN_BASE:
        raise ExtensionError(f"{name}: pinBase ({pin_base}) must be {EXTENSION_PIN_BASE} or more")

    return name, pin_base, parts[2:]


def load_extension(
    spec: str,
    registry: Optional[dict[str, type[ExtensionNode]]] = None,
) -> ExtensionNode:
    """
    Load one extension.

    Args:
        spec: name:pinBase[:params]
        registry: Name -> node class table, defaults to EXTENSIONS

    Returns:
        The loaded node

    Raises:
        ExtensionError: Unknown name, bad spec or the device failed
    """
    registry = EXTENSIONS if registry is None else registry
    name, pin_base, params = parse_extension_spec(spec)

    node_class = registry.get(name)
    if node_class is None:
        known = ", ".join(sorted(registry))
        raise ExtensionError(f"Extension {name} not found (known: {known})")

    node = node_class.from_params(pin_base, params)
    logger.info(f"Loaded {node!r}")
    return node
