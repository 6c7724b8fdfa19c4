"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol


class SignedUrlIssuer(Protocol):
    """Turns a storage key into a time-limited URL.

    Does not check that the object exists; callers validate the key first.
    Every call signs a fresh URL.
    """

    def issue(self, key: str) -> str: ...
