"""
Extension Implementations Package

Exposes the built-in extension nodes.
"""

from extensions.implementations.ads1115 import Ads1115Node
from extensions.implementations.mcp23017 import Mcp23017Node

__all__ = [
    "Ads1115Node",
    "Mcp23017Node",
]
