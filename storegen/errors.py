"""Exception hierarchy shared by every generator.

``InputError`` covers anything the user typed that cannot be generated from.
``CompositionError`` signals a defect in a descriptor or template and carries
the artifact that was being composed.  Filesystem errors are never wrapped:
``OSError`` propagates as-is to the CLI boundary.
"""

from __future__ import annotations

from collections.abc import Iterable


class StoreGenError(Exception):
    """Base class for all storegen errors."""


class InputError(StoreGenError):
    """Raised when user input cannot be turned into a generation run."""


class InvalidCollectionNameError(InputError):
    """Raised when one or more collection names are not identifier-safe."""

    def __init__(self, names: str | Iterable[str]) -> None:
        self.names = [names] if isinstance(names, str) else list(names)
        joined = ", ".join(repr(n) for n in self.names)
        super().__init__(f"Invalid Firestore collection name: {joined}")


class CompositionError(StoreGenError):
    """Raised when composing an artifact fails for a valid input."""

    def __init__(self, artifact: str, message: str) -> None:
        self.artifact = artifact
        super().__init__(f"[{artifact}] {message}")
