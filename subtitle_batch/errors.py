from __future__ import annotations


class SubtitleBatchError(Exception):
    """Base error for the subtitle batch pipeline."""


class NotFoundError(SubtitleBatchError, FileNotFoundError):
    """Raised when the root directory is blank, missing, or not a directory."""


class NoMediaFilesError(SubtitleBatchError):
    """Raised when discovery finds no video files under the root."""
