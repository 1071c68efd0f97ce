"""
Extension Interfaces Package

Exposes the contract every extension node implements.
"""

from extensions.interfaces.extension_interface import ExtensionError, ExtensionNode

__all__ = [
    "ExtensionError",
    "ExtensionNode",
]
