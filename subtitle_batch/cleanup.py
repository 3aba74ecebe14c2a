from __future__ import annotations

import logging
from typing import List

from .config import DEFAULT_ARTIFACTS, SubtitleArtifactSet
from .types import DeletionOutcome, DeletionResult, VideoFile

logger = logging.getLogger(__name__)


def remove_auxiliary_artifacts(
    video: VideoFile,
    artifacts: SubtitleArtifactSet = DEFAULT_ARTIFACTS,
) -> List[DeletionResult]:
    """Delete every auxiliary transcript file sharing the video's base name.

    Each extension is attempted independently: a missing file is reported as
    ``NOT_FOUND`` and an OS error as ``FAILED`` without stopping the loop.
    """

    results: List[DeletionResult] = []
    for extension in artifacts.auxiliary_extensions:
        target = video.sibling(extension)
        try:
            target.unlink()
        except FileNotFoundError:
            results.append(DeletionResult(target, DeletionOutcome.NOT_FOUND))
            continue
        except OSError as exc:
            logger.warning("Could not remove %s: %s", target, exc)
            results.append(DeletionResult(target, DeletionOutcome.FAILED, error=str(exc)))
            continue
        logger.debug("Removed %s", target)
        results.append(DeletionResult(target, DeletionOutcome.DELETED))
    return results


def has_final_subtitle(video: VideoFile, artifacts: SubtitleArtifactSet = DEFAULT_ARTIFACTS) -> bool:
    return video.sibling(artifacts.final_extension).is_file()


def needs_transcription(video: VideoFile, artifacts: SubtitleArtifactSet = DEFAULT_ARTIFACTS) -> bool:
    """Clean stale byproducts, then report whether the final subtitle is missing."""

    remove_auxiliary_artifacts(video, artifacts)
    if has_final_subtitle(video, artifacts):
        logger.debug("Subtitle already present for %s", video.path)
        return False
    return True
