from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class VideoFile:
    """One discovered media file."""

    path: Path
    directory: Path
    base_name: Path
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> "VideoFile":
        path = path.resolve()
        return cls(
            path=path,
            directory=path.parent,
            base_name=path.with_suffix(""),
            extension=path.suffix.lower(),
        )

    def sibling(self, extension: str) -> Path:
        """Path of ``{base_name}{extension}`` in the same directory."""
        return self.base_name.parent / f"{self.base_name.name}{extension}"


class DeletionOutcome(enum.Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class DeletionResult:
    path: Path
    outcome: DeletionOutcome
    error: Optional[str] = None


@dataclass(frozen=True)
class TranscriptionOutcome:
    """Result of a single engine invocation for one media file."""

    path: Path
    succeeded: bool
    returncode: Optional[int] = None
    error: Optional[str] = None
    command: Optional[List[str]] = None


@dataclass
class ProgressState:
    """Processed and total file counts for the current run."""

    total: int
    processed: int = 0

    def advance(self) -> None:
        if self.processed < self.total:
            self.processed += 1

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 100.0
        return 100.0 * self.processed / self.total


@dataclass
class BatchSummary:
    """Counts reported at the end of a run."""

    total: int
    transcribed: int = 0
    skipped: int = 0
    failed: int = 0
    error: Optional[str] = None
