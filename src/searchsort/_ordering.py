"""
Typing helpers shared by the algorithm modules.

`T` is bound to `SupportsOrdering`, so a type checker rejects element types
that cannot be compared. Nothing here is checked at run time.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

__all__ = ["SupportsOrdering", "T"]


class SupportsOrdering(Protocol):
    def __lt__(self, other: Any) -> bool: ...

    def __gt__(self, other: Any) -> bool: ...


T = TypeVar("T", bound=SupportsOrdering)
