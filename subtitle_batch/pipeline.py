from __future__ import annotations

import logging
from typing import List, Optional

from .cleanup import needs_transcription, remove_auxiliary_artifacts
from .config import PipelineConfig
from .discovery import find_video_files
from .errors import NoMediaFilesError
from .progress import ProgressReporter, progress_context
from .transcription import Transcriber, build_transcriber
from .types import BatchSummary, ProgressState, VideoFile

logger = logging.getLogger(__name__)


class SubtitleBatchAgent:
    """Walks a directory tree and transcribes every video that has no subtitle yet."""

    def __init__(self, config: Optional[PipelineConfig] = None, transcriber: Optional[Transcriber] = None):
        self.config = config or PipelineConfig()
        self.transcriber = transcriber or build_transcriber(self.config.transcription)

    def run(self) -> BatchSummary:
        videos = self.discover()
        summary = BatchSummary(total=len(videos))
        state = ProgressState(total=len(videos))

        logger.info("Processing %s video file(s) under %s", len(videos), self.config.run.root)
        with progress_context(len(videos), "Transcribing") as reporter:
            try:
                for video in videos:
                    self._process(video, summary, reporter)
                    state.advance()
                    reporter.update(1)
                    logger.debug("Progress: %.0f%% (%s/%s)", state.percent, state.processed, state.total)
            except Exception as exc:
                logger.exception("Batch stopped after %s of %s file(s)", state.processed, state.total)
                summary.error = str(exc)

        logger.info(
            "Done: %s transcribed, %s skipped, %s failed (of %s)",
            summary.transcribed,
            summary.skipped,
            summary.failed,
            summary.total,
        )
        return summary

    def discover(self) -> List[VideoFile]:
        videos = find_video_files(self.config.run.root, self.config.media_extensions)
        if not videos:
            raise NoMediaFilesError(f"No video files found under {self.config.run.root}")
        return videos

    def _process(self, video: VideoFile, summary: BatchSummary, reporter: ProgressReporter) -> None:
        artifacts = self.config.artifacts
        reporter.set_status(video.path.name)

        if not needs_transcription(video, artifacts):
            reporter.set_status(f"{video.path.name} (skipped)")
            summary.skipped += 1
            return

        logger.info("Transcribing %s", video.path)
        try:
            outcome = self.transcriber.transcribe(video.path, self.config.run)
        finally:
            # Drop the intermediate formats the engine wrote, keeping only the final subtitle.
            remove_auxiliary_artifacts(video, artifacts)

        if outcome.succeeded:
            summary.transcribed += 1
        else:
            summary.failed += 1
