from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from brain.emotions import Emotion
from brain.sentiment import SentimentRule

LOGGER = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent
DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES: Tuple[str, ...] = (
    "en",
    "ko",
    "ja",
    "zh-CN",
    "zh-TW",
    "es",
    "fr",
    "de",
    "pt",
    "ru",
)
CATEGORIES: Tuple[str, ...] = ("happy", "sad", "angry", "surprised")


class LocaleError(ValueError):
    """Raised when a keyword table cannot be found or read."""


class KeywordTable(BaseModel):
    """Sentiment trigger words for one locale."""

    model_config = ConfigDict(frozen=True)

    locale: str = Field(DEFAULT_LOCALE)
    happy: Tuple[str, ...] = Field(default=())
    sad: Tuple[str, ...] = Field(default=())
    angry: Tuple[str, ...] = Field(default=())
    surprised: Tuple[str, ...] = Field(default=())

    @field_validator("happy", "sad", "angry", "surprised", mode="before")
    def normalize_keywords(cls, v):
        if v is None:
            return ()
        if isinstance(v, str) or not isinstance(v, (list, tuple)):
            raise ValueError("keywords must be a list of strings")
        keywords = []
        for item in v:
            if not isinstance(item, str):
                raise ValueError(f"keyword must be a string, got {item!r}")
            item = item.strip().lower()
            if item:
                keywords.append(item)
        return tuple(keywords)

    def sentiment_rules(self) -> List[SentimentRule]:
        return [
            SentimentRule(self.happy, Emotion.HAPPY),
            SentimentRule(self.sad, Emotion.SAD),
            SentimentRule(self.angry, Emotion.ANGRY),
            SentimentRule(self.surprised, Emotion.SURPRISED),
        ]


def resolve_locale(*candidates: Optional[str], locales_dir: Optional[str] = None) -> str:
    """Return the first usable locale code among ``candidates``.

    A code is usable when it is bundled or ``locales_dir`` holds a table for it.
    """
    for code in candidates:
        if not code:
            continue
        if code in SUPPORTED_LOCALES:
            return code
        if locales_dir and (Path(locales_dir) / f"{code}.yaml").is_file():
            return code
        LOGGER.warning("Unsupported locale %r; ignoring", code)
    return DEFAULT_LOCALE


def load_keyword_table(code: str, locales_dir: Optional[str] = None) -> KeywordTable:
    """Load the keyword table for ``code``, following ``extends`` chains.

    Files in ``locales_dir`` take precedence over the bundled ones.
    """
    return _load_cached(code, str(locales_dir) if locales_dir else None)


@lru_cache(maxsize=None)
def _load_cached(code: str, locales_dir: Optional[str]) -> KeywordTable:
    search_dirs = [Path(locales_dir)] if locales_dir else []
    search_dirs.append(LOCALES_DIR)

    merged = _resolve_chain(code, search_dirs, seen=())
    try:
        table = KeywordTable(locale=code, **merged)
    except ValidationError as exc:
        raise LocaleError(f"Invalid keyword table for {code!r}: {exc}") from exc

    LOGGER.info(
        "Loaded keyword table %s (%d keywords)",
        code,
        sum(len(getattr(table, name)) for name in CATEGORIES),
    )
    return table


def _resolve_chain(code: str, search_dirs: List[Path], seen: Tuple[str, ...]) -> Dict[str, Any]:
    if code in seen:
        raise LocaleError(f"Locale inheritance cycle: {' -> '.join(seen + (code,))}")

    data = _read_table(code, search_dirs)
    base = data.pop("extends", None)
    merged: Dict[str, Any] = {}
    if base:
        merged.update(_resolve_chain(str(base), search_dirs, seen + (code,)))
    merged.update({key: data[key] for key in CATEGORIES if key in data})
    return merged


def _read_table(code: str, search_dirs: List[Path]) -> Dict[str, Any]:
    for directory in search_dirs:
        path = directory / f"{code}.yaml"
        if not path.exists():
            continue
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise LocaleError(f"Cannot read keyword table {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise LocaleError(f"Keyword table {path} must be a mapping")
        return data

    raise LocaleError(f"Unknown locale: {code!r}")
