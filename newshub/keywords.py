# -*- coding: utf-8 -*-
"""
keywords.py
关键字命中率：每个关键字命中几则标题（不分大小写的子串），命中率 = 命中数 / 总则数。
"""

from typing import Iterable, List, Optional, Sequence

from newshub.config import get_config
from newshub.models import KeywordStat, NewsItem
from newshub.utils import norm_text_for_match


def keyword_stats(items: Sequence[NewsItem], keywords: Optional[Iterable[str]] = None) -> List[KeywordStat]:
    if not items:
        return []
    if keywords is None:
        keywords = get_config().keywords

    titles = [norm_text_for_match(n.title) for n in items]
    total = len(titles)
    stats: List[KeywordStat] = []

    for kw in keywords:
        kw_lower = norm_text_for_match(kw)
        if not kw_lower:
            continue
        hits = sum(1 for t in titles if kw_lower in t)
        if hits > 0:
            stats.append(KeywordStat(keyword=kw, hits=hits, hit_rate=hits / total))

    # 热门的排前面；同命中数保持关键字表顺序
    stats.sort(key=lambda s: s.hits, reverse=True)
    return stats
