"""Identifier translation services.

Architecture Note:
    Unlike core/, mapping/ keeps per-session runtime state (received counts).
"""

from worldsync.mapping.identifier_map import IdentifierMap

__all__ = ["IdentifierMap"]
