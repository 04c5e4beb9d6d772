from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class CopyStats:
    copied: int = 0
    skipped: int = 0
    failed: int = 0


@dataclass(slots=True, frozen=True)
class CopyError:
    source: Path
    message: str
    kind: str = "OSError"

    @classmethod
    def from_exception(cls, source: Path, exc: BaseException) -> "CopyError":
        return cls(source=source, message=str(exc), kind=type(exc).__name__)

    def __str__(self) -> str:
        return f"{self.source}: {self.kind}: {self.message}"
