from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from rich.console import Console

from brain.annotator import ReplyAnnotator
from config import load_config, load_user_prefs
from locales.keywords import LocaleError

LOGGER = logging.getLogger(__name__)
DEFAULT_CONFIG = "conf.yaml"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="companion-annotate",
        description="Extract emotion/motion cues from companion replies.",
    )
    parser.add_argument("text", nargs="*", help="Raw replies to annotate (default: stdin lines)")
    parser.add_argument("--ask", metavar="MESSAGE", help="Send MESSAGE to the gateway and annotate the reply")
    parser.add_argument("--config", default=None, help=f"Config file (default: {DEFAULT_CONFIG})")
    parser.add_argument("--locale", default=None, help="Keyword locale override")
    return parser


def _load_config(path: Optional[str]) -> Dict[str, Any]:
    if path is not None:
        return load_config(path)
    if not Path(DEFAULT_CONFIG).exists():
        return {}
    return load_config(DEFAULT_CONFIG)


def _iter_inputs(texts: List[str], stream) -> Iterable[str]:
    if texts:
        yield from texts
        return
    for line in stream:
        line = line.rstrip("\n")
        if line.strip():
            yield line


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = _build_parser().parse_args(argv)
    console = console or Console()

    try:
        config = _load_config(args.config)
    except FileNotFoundError as exc:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
        LOGGER.error("%s", exc)
        return 1

    level = str((config.get("logging") or {}).get("level", "INFO")).upper()
    known_level = isinstance(logging.getLevelName(level), int)
    logging.basicConfig(
        level=level if known_level else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    if not known_level:
        LOGGER.warning("Unknown log level %r; using INFO", level)

    try:
        annotator = ReplyAnnotator.from_config(config, load_user_prefs(), locale=args.locale)
    except LocaleError as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.ask:
        parsed = asyncio.run(annotator.ask(args.ask))
        if parsed is None:
            return 1
        console.print_json(data=parsed.to_dict())
        return 0

    for raw in _iter_inputs(args.text, sys.stdin):
        console.print_json(data=annotator.annotate(raw).to_dict())
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
