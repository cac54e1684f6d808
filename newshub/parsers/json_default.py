# -*- coding: utf-8 -*-
"""
json_default.py
后端 API（GAS）回来的 JSON -> NewsItem 列表

典型格式：
{
    "news": [
        {
            "source": "ltn",
            "sourceName": "自由財經",
            "title": "新闻标题",
            "link": "https://ec.ltn.com.tw/article/...",
            "timestamp": "2025-11-18 09:30:00",
            "rawTime": "11/18 09:12"
        }
    ]
}
也接受直接是数组，或 {"items": [...]} / {"data": [...]}。
"""

import sys
from typing import Any, Dict, List, Optional, Union

from newshub.models import NewsItem
from newshub.utils import now_str


def _pick(item: Dict[str, Any], *keys: str) -> str:
    for k in keys:
        v = item.get(k)
        if v not in (None, ""):
            return str(v).strip()
    return ""


def _records(obj: Union[Dict, List]) -> List[Any]:
    if isinstance(obj, list):
        return obj
    if isinstance(obj, dict):
        for k in ("news", "items", "data"):
            if isinstance(obj.get(k), list):
                return obj[k]
    return []


def parse_json(obj: Union[Dict, List], source_id: str,
               source_names: Optional[Dict[str, str]] = None) -> List[NewsItem]:
    """
    参数:
        obj: 解析后的 JSON 对象
        source_id: 记录里没有 source 时用的来源代码
        source_names: 来源代码 -> 显示名，记录里没有 sourceName 时补上

    返回:
        NewsItem 列表（保持原顺序）；没有标题的记录直接跳过
    """
    items: List[NewsItem] = []
    names = source_names or {}
    records = _records(obj)
    if not records and obj:
        print(f"[json_parser] 未识别的结构 source_id={source_id} type={type(obj).__name__}", file=sys.stderr)

    for rec in records:
        if not isinstance(rec, dict):
            continue

        title = _pick(rec, "title", "headline")
        if not title:
            continue

        source = _pick(rec, "source") or source_id
        raw_time = _pick(rec, "rawTime", "raw_time") or None

        items.append(NewsItem(
            source=source,
            source_name=_pick(rec, "sourceName", "source_name") or names.get(source, source),
            title=title,
            link=_pick(rec, "link", "url"),
            # 缺时间就用抓取当下；格式由后端保证定宽
            timestamp=_pick(rec, "timestamp") or now_str(),
            raw_time=raw_time,
        ))

    return items
