from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, ContextManager, Iterator, Optional, Protocol

if TYPE_CHECKING:  # pragma: no cover - typing only
    import tqdm


class ProgressReporter(Protocol):
    """Minimal interface for progress callbacks."""

    def update(self, advance: int) -> None: ...

    def set_status(self, label: str) -> None: ...


ProgressFactory = Callable[[int, str], ContextManager[ProgressReporter]]


class _NoopProgress:
    def update(self, advance: int) -> None:
        return None

    def set_status(self, label: str) -> None:
        return None


@contextmanager
def _noop_progress(total: int, description: str) -> Iterator[ProgressReporter]:
    yield _NoopProgress()


class _TqdmProgress:
    """Adapter exposing tqdm's update and postfix as a progress reporter."""

    def __init__(self, bar: "tqdm.tqdm") -> None:
        self._bar = bar

    def update(self, advance: int) -> None:
        self._bar.update(advance)

    def set_status(self, label: str) -> None:
        self._bar.set_postfix_str(label)


@contextmanager
def tqdm_progress(total: int, description: str) -> Iterator[ProgressReporter]:
    """Percentage bar that is cleared from the terminal when the run ends."""
    from tqdm import tqdm

    with tqdm(total=total, desc=description, unit="file", leave=False, dynamic_ncols=True) as bar:
        yield _TqdmProgress(bar)


_progress_factory: Optional[ProgressFactory] = None


def set_progress_factory(factory: Optional[ProgressFactory]) -> None:
    """Register a global factory for progress reporters."""

    global _progress_factory
    _progress_factory = factory or _noop_progress


@contextmanager
def progress_context(total: int, description: str) -> Iterator[ProgressReporter]:
    factory = _progress_factory or _noop_progress
    with factory(total, description) as reporter:
        yield reporter


__all__ = [
    "ProgressReporter",
    "ProgressFactory",
    "progress_context",
    "set_progress_factory",
    "tqdm_progress",
]
