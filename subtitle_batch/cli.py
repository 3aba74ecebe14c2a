from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from . import progress
from .config import PipelineConfig, RunContext, TranscriptionConfig
from .errors import NoMediaFilesError, NotFoundError
from .pipeline import SubtitleBatchAgent

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate missing subtitles for every video under a directory.")
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Directory to scan recursively (defaults to the current working directory).",
    )
    parser.add_argument(
        "--auto-language",
        action="store_true",
        help="Let Whisper detect the spoken language instead of assuming English.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the Whisper command line and show its output.",
    )
    parser.add_argument(
        "--engine",
        type=str,
        choices=["cli", "python"],
        default="cli",
        help="Run the whisper executable (cli) or load the model in-process (python).",
    )
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR).")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PipelineConfig:
    # Left as given so a blank argument reaches root validation instead of becoming ".".
    root = Path.cwd() if args.root is None else args.root
    run = RunContext(root=root, auto_detect_language=args.auto_language, verbose=args.verbose)
    return PipelineConfig(run=run, transcription=TranscriptionConfig(engine=args.engine))


def _configure_logging(level_name: Optional[str], verbose: bool) -> None:
    level = getattr(logging, (level_name or os.getenv("LOG_LEVEL") or "INFO").upper(), logging.INFO)
    if verbose:
        level = min(level, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv()
    _configure_logging(args.log_level, args.verbose)

    config = build_config(args)
    progress.set_progress_factory(progress.tqdm_progress)
    try:
        agent = SubtitleBatchAgent(config=config)
        agent.run()
    except NotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except NoMediaFilesError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        progress.set_progress_factory(None)
    return 0
