"""Core type definitions for worldsync."""

from typing import TypeVar

from typing_extensions import TypeAliasType

T = TypeVar("T")

Borrowed = TypeAliasType("Borrowed", T, type_params=(T,))
"""Type alias marking a value as a handle into world-owned memory.

A `Borrowed[T]` is valid only for the pass that acquired it. The world may
reclaim it at any scheduling boundary, so it must be re-acquired through the
world interface instead of stored. Access after reclamation raises
`StaleHandleError` at best.
"""
