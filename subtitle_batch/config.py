import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union

MEDIA_EXTENSIONS: Tuple[str, ...] = (".mp4", ".avi", ".mkv", ".mov")

WHISPER_BIN_ENV = "SUBTITLE_BATCH_WHISPER_BIN"


def _default_engine_bin() -> str:
    return os.getenv(WHISPER_BIN_ENV) or "whisper"


@dataclass(frozen=True)
class SubtitleArtifactSet:
    """Extensions written by the transcription engine next to the media file."""

    final_extension: str = ".srt"
    auxiliary_extensions: Tuple[str, ...] = (".json", ".tsv", ".txt", ".vtt")


DEFAULT_ARTIFACTS = SubtitleArtifactSet()


@dataclass
class TranscriptionConfig:
    """Configuration for the Whisper engine invocation."""

    engine: str = "cli"  # "cli" shells out, "python" runs the model in-process
    engine_bin: str = field(default_factory=_default_engine_bin)
    model_size: str = "medium"
    device: str = "cpu"
    language: str = "en"


@dataclass(frozen=True)
class RunContext:
    """Invocation parameters, read-only for the duration of a run."""

    root: Union[str, Path]
    auto_detect_language: bool = False
    verbose: bool = False


@dataclass
class PipelineConfig:
    """Top level configuration for the subtitle batch agent."""

    run: RunContext = field(default_factory=lambda: RunContext(root=Path.cwd()))
    transcription: TranscriptionConfig = field(default_factory=TranscriptionConfig)
    artifacts: SubtitleArtifactSet = DEFAULT_ARTIFACTS
    media_extensions: Tuple[str, ...] = MEDIA_EXTENSIONS
