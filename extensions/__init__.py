"""
Extensions Module

Extension nodes add pins beyond the SoC GPIOs (I/O expanders, ADCs).

Public API:
    - load_extension: Build a node from a `-x` spec string
    - ExtensionNode: Base class for nodes
    - ExtensionError: Load or operation failure

Usage:
    from extensions import load_extension

    node = load_extension("mcp23017:100:0x20")
    pins.register_node(node)
"""

from extensions.interfaces.extension_interface import ExtensionError, ExtensionNode
from extensions.loader import EXTENSIONS, load_extension, parse_extension_spec

__all__ = [
    "EXTENSIONS",
    "ExtensionError",
    "ExtensionNode",
    "load_extension",
    "parse_extension_spec",
]
