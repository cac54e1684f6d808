# -*- coding: utf-8 -*-
"""
rss_default.py
RSS/Atom 内容 -> NewsItem 列表
时间戳优先用 published，其次 updated，都没有就用抓取当下，统一格式化成定宽本地时间。
"""

import datetime
import sys
from typing import Any, List, Optional

import feedparser

from newshub.models import NewsItem
from newshub.utils import TIMESTAMP_FORMAT, now_str


def _entry_time(entry: Any) -> Optional[str]:
    for attr in ("published_parsed", "updated_parsed"):
        parsed = entry.get(attr)
        if not parsed:
            continue
        try:
            dt = datetime.datetime(*parsed[:6], tzinfo=datetime.timezone.utc)
        except (TypeError, ValueError):
            continue
        return dt.astimezone().strftime(TIMESTAMP_FORMAT)
    return None


def parse_rss(text: str, source_id: str, source_name: str = "") -> List[NewsItem]:
    """
    参数:
        text: RSS/Atom XML 文本
        source_id: 来源代码
        source_name: 显示名，空则用 feed 标题

    返回:
        NewsItem 列表；无标题的条目跳过
    """
    feed = feedparser.parse(text)
    if feed.get("bozo") and not feed.get("entries"):
        print(f"[rss_parser] 解析错误 source_id={source_id}: {feed.get('bozo_exception')!r}", file=sys.stderr)
        return []

    name = source_name or (feed.get("feed") or {}).get("title", "") or source_id
    items: List[NewsItem] = []

    for entry in feed.get("entries", []):
        title = (entry.get("title") or "").strip()
        if not title:
            continue

        items.append(NewsItem(
            source=source_id,
            source_name=name,
            title=title,
            link=(entry.get("link") or "").strip(),
            timestamp=_entry_time(entry) or now_str(),
            raw_time=entry.get("published") or entry.get("updated"),
        ))

    return items
