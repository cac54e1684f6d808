# -*- coding: utf-8 -*-
"""
sentiment.py
最简单的字典规则判断标题情绪：
- 命中正向字 +1，负向字 +1（同一个词出现多次只算一次）
- 正 > 负 → positive；负 > 正 → negative；都 0 或平手 → neutral
"""

from typing import Iterable, Optional

from newshub.config import get_config

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"

SENTIMENTS = (POSITIVE, NEGATIVE, NEUTRAL)

_LABELS = {
    POSITIVE: "偏正向",
    NEGATIVE: "偏負向",
    NEUTRAL: "中性",
}


def _count_hits(text: str, words: Iterable[str]) -> int:
    return sum(1 for w in words if w and w.lower() in text)


def get_sentiment(title: str,
                  positive_words: Optional[Iterable[str]] = None,
                  negative_words: Optional[Iterable[str]] = None) -> str:
    if positive_words is None or negative_words is None:
        cfg = get_config()
        if positive_words is None:
            positive_words = cfg.positive_words
        if negative_words is None:
            negative_words = cfg.negative_words

    t = (title or "").lower()
    pos = _count_hits(t, positive_words)
    neg = _count_hits(t, negative_words)

    if pos > neg:
        return POSITIVE
    if neg > pos:
        return NEGATIVE
    return NEUTRAL


def sentiment_label(sentiment: str) -> str:
    """情绪 code → 画面上的中文"""
    return _LABELS.get(sentiment, _LABELS[NEUTRAL])
