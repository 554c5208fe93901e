# realm_config/errors.py
"""
Error taxonomy for split/merge runs.

spec_legend:
  r: Return value (shape & invariants)
  s: Side effects
  e: Errors/exceptions behavior
  notes: Brief extra context that aids correct use

defaults:
  context: phase ("split" | "merge" | ...) and path are optional; codec
           functions raise without them and callers attach them via in_context()
  rendering: "phase: path: message" (missing parts omitted)
"""

from typing import Optional


class RealmConfigError(Exception):
    """
    spec:
      name: RealmConfigError
      kind: Exception
      attributes:
        message: str
        phase: str|None
        path: str|None
      notes:
        - Base class; the CLI catches this and exits 1.
    """

    def __init__(self, message: str, *, phase: Optional[str] = None, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.path = path

    def __str__(self) -> str:
        parts = [p for p in (self.phase, self.path) if p]
        parts.append(self.message)
        return ": ".join(parts)

    def in_context(self, phase: str, path: Optional[str] = None) -> "RealmConfigError":
        """
        spec:
          name: RealmConfigError.in_context
          r: New error of the same class; existing phase/path win over the new ones
          s: []
          e: none
        """
        return type(self)(
            self.message,
            phase=self.phase or phase,
            path=self.path or (str(path) if path is not None else None),
        )


class DecodeError(RealmConfigError):
    """Document is not well-formed or a required field is missing/mistyped."""


class EncodeError(RealmConfigError):
    """Serializing an in-memory value failed. Unexpected for valid values."""


class FileIOError(RealmConfigError):
    """Read, write or directory creation failed."""


class DirectoryMissingError(FileIOError):
    """Section directory does not exist (merge before split)."""
