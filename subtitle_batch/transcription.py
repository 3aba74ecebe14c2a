from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol

from .config import RunContext, TranscriptionConfig
from .types import TranscriptionOutcome

logger = logging.getLogger(__name__)


class Transcriber(Protocol):
    """Anything that can turn a media file into subtitle files beside it."""

    def transcribe(self, media_path: Path, options: RunContext) -> TranscriptionOutcome: ...


class WhisperCliTranscriber:
    """Runs the ``whisper`` command line tool once per media file."""

    def __init__(self, config: TranscriptionConfig):
        self.config = config

    def build_command(self, media_path: Path, auto_detect_language: bool = False) -> List[str]:
        command = [
            self.config.engine_bin,
            "--model",
            self.config.model_size,
            "--device",
            self.config.device,
            str(media_path),
        ]
        if not auto_detect_language:
            command.extend(["--language", self.config.language])
        return command

    def transcribe(self, media_path: Path, options: RunContext) -> TranscriptionOutcome:
        command = self.build_command(media_path, options.auto_detect_language)
        if options.verbose:
            logger.info("Running: %s", shlex.join(command))
        stream = None if options.verbose else subprocess.DEVNULL
        try:
            # The engine writes its outputs into the working directory of the child.
            subprocess.run(
                command,
                cwd=str(media_path.parent),
                stdout=stream,
                stderr=stream,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            logger.warning("Transcription failed for %s (exit code %s)", media_path, exc.returncode)
            return TranscriptionOutcome(
                path=media_path,
                succeeded=False,
                returncode=exc.returncode,
                error=str(exc),
                command=command,
            )
        except OSError as exc:
            logger.warning("Could not start %s for %s: %s", self.config.engine_bin, media_path, exc)
            return TranscriptionOutcome(path=media_path, succeeded=False, error=str(exc), command=command)
        return TranscriptionOutcome(path=media_path, succeeded=True, returncode=0, command=command)


class WhisperModelTranscriber:
    """Runs Whisper in-process and writes every output format next to the source."""

    _WRITER_OPTIONS = {"max_line_width": None, "max_line_count": None, "highlight_words": False}

    def __init__(self, config: TranscriptionConfig):
        self.config = config
        self._model = None

    def _load_model(self):
        if self._model is not None:
            return self._model
        import whisper

        logger.info("Loading Whisper model '%s' on device '%s'...", self.config.model_size, self.config.device)
        self._model = whisper.load_model(self.config.model_size, device=self.config.device)
        return self._model

    def transcribe(self, media_path: Path, options: RunContext) -> TranscriptionOutcome:
        language: Optional[str] = None if options.auto_detect_language else self.config.language
        try:
            from whisper.utils import get_writer

            model = self._load_model()
            logger.debug("Transcribing %s (language=%s)", media_path, language or "auto")
            result = model.transcribe(
                str(media_path),
                language=language,
                task="transcribe",
                fp16=self.config.device != "cpu",
                verbose=True if options.verbose else None,
            )
            writer = get_writer("all", str(media_path.parent))
            writer(result, str(media_path), self._WRITER_OPTIONS)
        except Exception as exc:
            logger.warning("Transcription failed for %s: %s", media_path, exc)
            return TranscriptionOutcome(path=media_path, succeeded=False, error=str(exc))
        return TranscriptionOutcome(path=media_path, succeeded=True)


def build_transcriber(config: TranscriptionConfig) -> Transcriber:
    engine = (config.engine or "cli").lower()
    if engine == "cli":
        return WhisperCliTranscriber(config)
    if engine == "python":
        return WhisperModelTranscriber(config)
    raise ValueError(f"Unsupported transcription engine: {config.engine}")
