# -*- coding: utf-8 -*-
"""
models.py
新闻、标题指纹、事件群组、关键字统计的数据模型。
时间戳一律是字符串，调用方必须保证格式定宽（如 "2025-11-18 09:30:00"），
这样字典序 == 时间先后，聚合里的“最新那则”才成立。
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class NewsItem:
    # 来源代码，如 ltn / udn / yahoo
    source: str
    # 显示用来源名，如「自由財經」
    source_name: str

    title: str
    # 可能是相对路径，展示前交给 collector.fix_link
    link: str

    # 抓取时间（定宽字符串）与原始新闻时间
    timestamp: str
    raw_time: Optional[str] = None


@dataclass(frozen=True)
class TitleFingerprint:
    stock_code: Optional[str]
    topic_keywords: Tuple[str, ...]
    base: str
    bigrams: FrozenSet[str]


@dataclass(frozen=True)
class EventCluster:
    # 群组 key：stock:2330-时间 / topic:台股-时间 / title:前10字-时间
    id: str

    # 代表字段，始终取自最新那则
    title: str
    source_name: str
    latest_timestamp: str
    sentiment: str

    count: int
    items: Tuple[NewsItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class KeywordStat:
    keyword: str
    hits: int
    hit_rate: float  # 0~1


@dataclass(frozen=True)
class DashboardSnapshot:
    # 未筛选的总数
    total: int
    filtered: List[NewsItem]
    clusters: List[EventCluster]
    keyword_stats: List[KeywordStat]
