"""Shared fixtures for subtitle_batch tests."""

from pathlib import Path
from typing import List

import pytest

from subtitle_batch import progress
from subtitle_batch.config import RunContext
from subtitle_batch.types import TranscriptionOutcome


class FakeTranscriber:
    """Records calls and optionally writes the files Whisper would produce."""

    def __init__(self, succeed: bool = True, write_outputs: bool = True):
        self.succeed = succeed
        self.write_outputs = write_outputs
        self.calls: List[Path] = []

    def transcribe(self, media_path: Path, options: RunContext) -> TranscriptionOutcome:
        self.calls.append(media_path)
        if self.write_outputs:
            for ext in (".srt", ".json", ".tsv", ".txt", ".vtt"):
                media_path.with_suffix(ext).write_text("x", encoding="utf-8")
        return TranscriptionOutcome(path=media_path, succeeded=self.succeed, returncode=0 if self.succeed else 1)


@pytest.fixture
def fake_transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture(autouse=True)
def _reset_progress_factory():
    yield
    progress.set_progress_factory(None)


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path
