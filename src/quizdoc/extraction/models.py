"""Transient data structures shared by the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A user-submitted document: declared name plus raw payload."""

    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str | None:
        """Lowercase suffix after the final dot, or None when there is none."""

        if "." not in self.name:
            return None
        suffix = self.name.rsplit(".", 1)[1].strip().lower()
        return suffix or None

    @classmethod
    def from_path(cls, path: str | Path) -> "SourceFile":
        source = Path(path)
        return cls(name=source.name, data=source.read_bytes())
