# -*- coding: utf-8 -*-
"""
fingerprint.py
标题“指纹”：拿来比较两则新闻是否为同一事件。
股票代码与主题关键字都在**原始标题**上找，base / bigrams 用清理后的标题。
"""

import re
from typing import Iterable, List, Optional

from newshub.config import get_config
from newshub.models import TitleFingerprint
from newshub.utils import build_bigrams, normalize_title

# 独立的 4 码数字（2330、0050）；ASCII 边界，汉字旁边也算边界，5 码以上不算
_STOCK_CODE = re.compile(r"\b\d{4}\b", re.ASCII)


def extract_stock_code(title: str) -> Optional[str]:
    m = _STOCK_CODE.search(title)
    return m.group(0) if m else None


def extract_topic_keywords(title: str, keywords: Iterable[str]) -> List[str]:
    """依关键字表顺序返回标题中命中的主题关键字（子串比对，区分大小写）"""
    return [kw for kw in keywords if kw and kw in title]


def build_fingerprint(title: str, cluster_keywords: Optional[Iterable[str]] = None) -> TitleFingerprint:
    """
    产生一个标题的指纹

    参数:
        title: 原始标题
        cluster_keywords: 主题关键字表，None 时用全局配置

    返回:
        TitleFingerprint；base 为空表示这则不参与聚合
    """
    if cluster_keywords is None:
        cluster_keywords = get_config().cluster_keywords

    raw = (title or "").strip()
    base = normalize_title(raw)
    return TitleFingerprint(
        stock_code=extract_stock_code(raw),
        topic_keywords=tuple(extract_topic_keywords(raw, cluster_keywords)),
        base=base,
        bigrams=build_bigrams(base),
    )
