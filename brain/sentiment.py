from __future__ import annotations

from typing import NamedTuple, Sequence, Tuple

from brain.emotions import DEFAULT_EMOTION, Emotion


class SentimentRule(NamedTuple):
    keywords: Tuple[str, ...]
    emotion: Emotion


def classify(text: str, rules: Sequence[SentimentRule]) -> Emotion:
    """Infer an emotion from plain keyword hits.

    Rules are tried in the order given and keywords in list order; the first
    keyword found anywhere in the lower-cased text decides. Nothing matching
    means neutral.
    """
    lowered = (text or "").lower()
    if not lowered:
        return DEFAULT_EMOTION

    for keywords, emotion in rules:
        for keyword in keywords:
            if keyword and keyword in lowered:
                return emotion

    return DEFAULT_EMOTION
