from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from brain.emotions import DEFAULT_EMOTION, Emotion, Motion
from brain.sentiment import SentimentRule, classify

EMOTION_TAG_PATTERN = re.compile(r"\[emotion:(\w+)\]", re.IGNORECASE | re.ASCII)
MOTION_TAG_PATTERN = re.compile(r"\[motion:(\w+)\]", re.IGNORECASE | re.ASCII)
ANY_TAG_PATTERN = re.compile(r"\[(?:emotion|motion):\w+\]", re.IGNORECASE | re.ASCII)
WHITESPACE_RUN_PATTERN = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class ParsedResponse:
    """Display-ready reply: clean text plus animation cues."""

    text: str
    emotion: Emotion = DEFAULT_EMOTION
    motion: Optional[Motion] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "text": self.text,
            "emotion": self.emotion.value,
            "motion": self.motion.value if self.motion is not None else None,
        }


def parse_response(
    raw: Optional[str], rules: Sequence[SentimentRule] = ()
) -> ParsedResponse:
    """Turn a raw model reply into a :class:`ParsedResponse`.

    ``[emotion:x]`` and ``[motion:x]`` tags are looked up independently; the
    first tag of each kind with a known value wins. Every tag, known or not,
    is removed from the text. Without a usable emotion tag the emotion comes
    from keyword ``rules`` applied to the cleaned text.
    """
    if not raw or not isinstance(raw, str):
        return ParsedResponse(text="")

    emotion = _first_valid(EMOTION_TAG_PATTERN, raw, Emotion.from_tag)
    motion = _first_valid(MOTION_TAG_PATTERN, raw, Motion.from_tag)

    text = strip_tags(raw)
    if emotion is None:
        emotion = classify(text, rules)

    return ParsedResponse(text=text, emotion=emotion, motion=motion)


def strip_tags(text: str) -> str:
    """Remove directive tags and collapse the whitespace they leave behind."""
    # Removing one tag can join its neighbours into a new one.
    while True:
        stripped = ANY_TAG_PATTERN.sub("", text)
        if stripped == text:
            break
        text = stripped
    return WHITESPACE_RUN_PATTERN.sub(" ", text.strip()).strip()


def _first_valid(pattern, raw: str, lookup):
    for match in pattern.finditer(raw):
        value = lookup(match.group(1))
        if value is not None:
            return value
    return None
