# -*- coding: utf-8 -*-
"""
pipeline.py
一趟完整计算：筛选 -> 事件聚合 -> 关键字命中率。
每次筛选条件变动都整份重算，不做增量。
"""

import sys
from dataclasses import asdict
from typing import Any, Dict, Iterable, Optional

from newshub.clusterer import cluster_news
from newshub.config import HubConfig, get_config
from newshub.filters import SENTIMENT_ALL, filter_news
from newshub.keywords import keyword_stats
from newshub.models import DashboardSnapshot, NewsItem
from newshub.sentiment import get_sentiment


def build_snapshot(items: Iterable[NewsItem],
                   source: str = "",
                   keyword: str = "",
                   sentiment: str = SENTIMENT_ALL,
                   cfg: Optional[HubConfig] = None) -> DashboardSnapshot:
    cfg = cfg or get_config()
    all_items = list(items)

    filtered = filter_news(all_items, source=source, keyword=keyword, sentiment=sentiment, cfg=cfg)
    clusters = cluster_news(filtered, cfg)
    stats = keyword_stats(filtered, cfg.keywords)

    print(f"[pipeline] 共 {len(all_items)} 则｜筛选后 {len(filtered)} 则｜{len(clusters)} 群事件｜{len(stats)} 个关键字", file=sys.stderr)
    return DashboardSnapshot(
        total=len(all_items),
        filtered=filtered,
        clusters=clusters,
        keyword_stats=stats,
    )


def snapshot_to_dict(snapshot: DashboardSnapshot, cfg: Optional[HubConfig] = None) -> Dict[str, Any]:
    """转成可 json.dumps 的结构；列表里每则附上情绪"""
    cfg = cfg or get_config()
    positive, negative = cfg.positive_words, cfg.negative_words

    news = []
    for n in snapshot.filtered:
        row = asdict(n)
        row["sentiment"] = get_sentiment(n.title, positive, negative)
        news.append(row)

    clusters = []
    for c in snapshot.clusters:
        row = asdict(c)
        row["items"] = [asdict(n) for n in c.items]
        clusters.append(row)

    return {
        "total": snapshot.total,
        "news": news,
        "clusters": clusters,
        "keyword_stats": [asdict(s) for s in snapshot.keyword_stats],
    }
