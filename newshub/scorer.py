# -*- coding: utf-8 -*-
"""
scorer.py
两个指纹的相似度分数（加法制）：
- 同一支股票代码         +4
- 有共同主题关键字       +2（只看有没有，不看几个）
- bigram Jaccard 分档   +3 / +2 / +1
所有权重都可在 ops/config.yml 的 similarity 块调整。
"""

from typing import AbstractSet, Optional, Sequence, Tuple

from newshub.config import HubConfig, get_config
from newshub.models import TitleFingerprint


def bigram_similarity(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """两个 bigram 集合的 Jaccard 相似度（0 ~ 1），任一为空则 0"""
    if not a or not b:
        return 0.0
    inter = len(a & b)
    union = len(a) + len(b) - inter
    return inter / union


def _tier_score(sim: float, tiers: Sequence[Tuple[float, int]]) -> int:
    for floor, points in tiers:
        if sim >= floor:
            return points
    return 0


def calc_similarity(a: TitleFingerprint, b: TitleFingerprint,
                    cfg: Optional[HubConfig] = None) -> int:
    """
    综合股票代码 + 主题关键字 + bigram，算一个非负整数分数。
    对 a、b 对称。
    """
    cfg = cfg or get_config()
    score = 0

    # 同一支股票 → 加很多分
    if a.stock_code and b.stock_code and a.stock_code == b.stock_code:
        score += cfg.stock_bonus

    # 共同主题关键字
    if set(a.topic_keywords) & set(b.topic_keywords):
        score += cfg.topic_bonus

    # 标题文字本身的相似度
    score += _tier_score(bigram_similarity(a.bigrams, b.bigrams), cfg.bigram_tiers)

    return score
