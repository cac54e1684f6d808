# -*- coding: utf-8 -*-
"""
utils.py
标题清理与通用小工具：
- strip_decorations：去掉【快訊】、（影）、[影音]、「｜媒體名」这类装饰
- normalize_title：只留中文 + 英数字的小写串
- build_bigrams：两个字一组的片段集合
"""

import re
import time
from typing import FrozenSet

# 依序去掉的括号对；不处理嵌套，只做非贪婪的“一对一对”删除
_DECORATION_PATTERNS = [
    re.compile(r"【[^】]*】"),
    re.compile(r"［[^］]*］"),
    re.compile(r"\[[^\]]*\]"),
    re.compile(r"（[^）]*）"),
    re.compile(r"\([^)]*\)"),
]

# 媒体尾巴：「標題｜媒體名稱」
_SOURCE_TAIL = re.compile(r"｜.*", re.S)

# 保留 ASCII 英数字 + 常用汉字
_NON_TITLE_CHARS = re.compile(r"[^0-9A-Za-z\u4e00-\u9fa5]")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def strip_decorations(title: str) -> str:
    t = title or ""
    for pattern in _DECORATION_PATTERNS:
        t = pattern.sub("", t)
    t = _SOURCE_TAIL.sub("", t)
    return t.strip()


def normalize_title(title: str) -> str:
    """
    清理后的标题，用于指纹比对

    返回:
        只含汉字与英数字的小写字符串（可能为空）
    """
    cleaned = strip_decorations(title)
    return _NON_TITLE_CHARS.sub("", cleaned).lower().strip()


def build_bigrams(s: str) -> FrozenSet[str]:
    if len(s) <= 1:
        return frozenset()
    return frozenset(s[i:i + 2] for i in range(len(s) - 1))


def now_str() -> str:
    """当前本地时间，定宽格式，字典序即时间序"""
    return time.strftime(TIMESTAMP_FORMAT, time.localtime())


def norm_text_for_match(s: str) -> str:
    # 子串比对统一用小写
    return (s or "").lower()
