from __future__ import annotations

from enum import Enum
from typing import Optional


class Emotion(str, Enum):
    """Expressions the Live2D renderer knows how to show."""

    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    SURPRISED = "surprised"
    NEUTRAL = "neutral"
    RELAXED = "relaxed"
    THINKING = "thinking"

    @classmethod
    def from_tag(cls, value: str) -> Optional["Emotion"]:
        return _lookup(cls, value)


class Motion(str, Enum):
    """One-shot body motions."""

    WAVE = "wave"
    NOD = "nod"
    SHAKE = "shake"
    IDLE = "idle"

    @classmethod
    def from_tag(cls, value: str) -> Optional["Motion"]:
        return _lookup(cls, value)


DEFAULT_EMOTION = Emotion.NEUTRAL


def _lookup(enum_cls, value):
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.lower())
    except ValueError:
        return None
