from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import MEDIA_EXTENSIONS
from .errors import NotFoundError
from .types import VideoFile

logger = logging.getLogger(__name__)


def resolve_root(root: Optional[Union[str, Path]]) -> Path:
    """Validate the root directory and return it as an absolute path."""

    if root is None or not str(root).strip():
        raise NotFoundError("No root directory given.")
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise NotFoundError(f"Root directory does not exist: {root_path}")
    if not root_path.is_dir():
        raise NotFoundError(f"Root path is not a directory: {root_path}")
    return root_path


def find_video_files(
    root: Union[str, Path],
    extensions: Iterable[str] = MEDIA_EXTENSIONS,
) -> List[VideoFile]:
    """Recursively collect media files under ``root``, sorted by path."""

    root_path = resolve_root(root)
    allowed = {ext.lower() for ext in extensions}
    matches = sorted(
        path for path in root_path.rglob("*") if path.is_file() and path.suffix.lower() in allowed
    )
    logger.info("Found %s video file(s) under %s", len(matches), root_path)
    return [VideoFile.from_path(path) for path in matches]
