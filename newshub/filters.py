# -*- coding: utf-8 -*-
"""
filters.py
第一层：来源 + 标题关键字 + 情绪 筛选，产出本趟计算用的快照。
"""

from typing import Iterable, List, Optional

from newshub.config import HubConfig, get_config
from newshub.models import NewsItem
from newshub.sentiment import SENTIMENTS, get_sentiment
from newshub.utils import norm_text_for_match

SENTIMENT_ALL = "all"


def filter_news(items: Iterable[NewsItem],
                source: str = "",
                keyword: str = "",
                sentiment: str = SENTIMENT_ALL,
                cfg: Optional[HubConfig] = None) -> List[NewsItem]:
    """
    参数:
        source: 来源代码，空字符串表示全部
        keyword: 标题关键字（不分大小写子串），空表示不筛
        sentiment: all / positive / negative / neutral

    返回:
        保持原顺序的新列表
    """
    if sentiment != SENTIMENT_ALL and sentiment not in SENTIMENTS:
        raise ValueError(f"未知的情绪条件: {sentiment}")

    cfg = cfg or get_config()
    positive, negative = cfg.positive_words, cfg.negative_words
    kw = norm_text_for_match(keyword)

    out: List[NewsItem] = []
    for n in items:
        if source and n.source != source:
            continue
        if kw and kw not in norm_text_for_match(n.title):
            continue
        if sentiment != SENTIMENT_ALL and get_sentiment(n.title, positive, negative) != sentiment:
            continue
        out.append(n)
    return out
