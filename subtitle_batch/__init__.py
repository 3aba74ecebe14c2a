"""Batch pipeline that fills in missing subtitles for a tree of video files."""

from .config import PipelineConfig, RunContext
from .pipeline import SubtitleBatchAgent

__all__ = ["SubtitleBatchAgent", "PipelineConfig", "RunContext"]
