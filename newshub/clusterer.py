# -*- coding: utf-8 -*-
"""
clusterer.py
事件分群：单趟、贪心、依输入顺序的线上聚合。

每则新闻：
  1) 建指纹，base 为空就跳过
  2) 跟每个现有群组的“代表指纹”算分，取最高分（同分取最早建立的群组）
  3) 最高分 >= 门槛 → 并入；若这则比较新，代表标题/来源/情绪/指纹换成它
  4) 否则开新群组
最后按最新时间倒序，转成不带指纹的 EventCluster。

时间比较全部是字符串字典序，输入时间戳必须定宽（见 models.py）。
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from newshub.config import HubConfig, get_config
from newshub.fingerprint import build_fingerprint
from newshub.models import EventCluster, NewsItem, TitleFingerprint
from newshub.scorer import calc_similarity
from newshub.sentiment import get_sentiment


@dataclass
class _WorkingCluster:
    """只在一趟聚合里存在的可变群组，带代表指纹"""
    id: str
    title: str
    source_name: str
    latest_timestamp: str
    sentiment: str
    fp: TitleFingerprint
    items: List[NewsItem] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)


def cluster_key(fp: TitleFingerprint, timestamp: str) -> str:
    """
    多阶段事件 key：股票代码 > 第一个主题关键字 > 清理后标题前 10 字，
    后面接上时间；同一趟撞 key 时由 cluster_news 再接序号
    """
    if fp.stock_code:
        head = f"stock:{fp.stock_code}"
    elif fp.topic_keywords:
        head = f"topic:{fp.topic_keywords[0]}"
    else:
        head = f"title:{fp.base[:10]}"
    return f"{head}-{timestamp}"


def _unique_id(key: str, used: set) -> str:
    """同一批抓取常共用时间戳；key 撞了就接 -2、-3 ..."""
    cid, n = key, 1
    while cid in used:
        n += 1
        cid = f"{key}-{n}"
    used.add(cid)
    return cid


def _best_match(fp: TitleFingerprint, working: List[_WorkingCluster], cfg: HubConfig):
    best_index = -1
    best_score = 0
    for i, cluster in enumerate(working):
        score = calc_similarity(fp, cluster.fp, cfg)
        # 严格大于：同分留最早建立的
        if score > best_score:
            best_score = score
            best_index = i
    return best_index, best_score


def _freeze(cluster: _WorkingCluster) -> EventCluster:
    return EventCluster(
        id=cluster.id,
        title=cluster.title,
        source_name=cluster.source_name,
        latest_timestamp=cluster.latest_timestamp,
        sentiment=cluster.sentiment,
        count=cluster.count,
        items=tuple(cluster.items),
    )


def cluster_news(items: Iterable[NewsItem], cfg: Optional[HubConfig] = None) -> List[EventCluster]:
    cfg = cfg or get_config()
    threshold = cfg.cluster_threshold
    cluster_keywords = cfg.cluster_keywords
    positive, negative = cfg.positive_words, cfg.negative_words

    working: List[_WorkingCluster] = []
    used_ids = set()

    for item in items:
        fp = build_fingerprint(item.title, cluster_keywords)
        if not fp.base:
            continue

        sentiment = get_sentiment(item.title, positive, negative)
        best_index, best_score = _best_match(fp, working, cfg)

        if best_index >= 0 and best_score >= threshold:
            cluster = working[best_index]
            cluster.items.append(item)
            if item.timestamp > cluster.latest_timestamp:
                cluster.latest_timestamp = item.timestamp
                cluster.title = item.title
                cluster.source_name = item.source_name
                cluster.sentiment = sentiment
                cluster.fp = fp
        else:
            cid = _unique_id(cluster_key(fp, item.timestamp), used_ids)
            working.append(_WorkingCluster(
                id=cid,
                title=item.title,
                source_name=item.source_name,
                latest_timestamp=item.timestamp,
                sentiment=sentiment,
                fp=fp,
                items=[item],
            ))

    # sorted 是稳定排序，同一时间保持建立顺序
    working = sorted(working, key=lambda c: c.latest_timestamp, reverse=True)
    return [_freeze(c) for c in working]


def cluster_preview(cluster: EventCluster, limit: Optional[int] = None):
    """
    聚合卡片要列出的前几则，以及“还有 N 则”的 N

    返回:
        (shown_items, more_count)，more_count = count - len(shown_items)
    """
    if limit is None:
        limit = get_config().cluster_preview_limit
    shown = cluster.items[:max(limit, 0)]
    return shown, cluster.count - len(shown)
