# -*- coding: utf-8 -*-
"""
config.py
内置默认配置 + ops/config.yml 覆盖 + 热加载。
- ops/config.yml 可选；不存在就用默认，读坏了也回退默认
- 顶层浅合并，dict 类型的块再往下合并一层
- HubConfig 按文件 mtime 热加载（默认 30s 检查一次）
"""

from __future__ import annotations

import copy
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CFG_PATH = ROOT / "ops" / "config.yml"

# 命中率统计用的 20 个常用关键字
KEYWORDS = [
    "台積電", "台股", "美股", "日股", "匯率",
    "新台幣", "利率", "升息", "降息", "通膨",
    "ETF", "高股息", "債券", "殖利率", "AI",
    "半導體", "房市", "退休", "勞保", "關稅",
]

# 事件聚合用的主题关键字（顺序决定 topic key 取哪一个）
CLUSTER_KEYWORDS = [
    "台積電", "台股", "美股", "日股", "匯率",
    "新台幣", "利率", "升息", "降息", "通膨",
    "ETF", "高股息", "債券", "殖利率", "AI",
    "半導體", "房市", "勞保", "退休", "關稅",
]

POSITIVE_WORDS = [
    "大漲", "飆升", "勁揚", "走高", "走揚", "上攻", "收紅", "收高",
    "創高", "創新高", "創歷史新高", "利多", "成長", "激增", "回溫",
    "熱絡", "受惠", "看好", "樂觀", "好轉", "穩中有進", "加薪",
]

NEGATIVE_WORDS = [
    "暴跌", "崩跌", "崩盤", "重挫", "重跌", "大跌", "慘跌", "下殺",
    "下挫", "摜破", "失守", "利空", "下滑", "衰退", "走跌", "走弱",
    "拉回", "修正", "回檔", "爆雷", "違約", "爛帳", "風險升高", "悲觀",
    "哭哭",
]

DEFAULT_CFG: Dict[str, Any] = {
    "schema_version": 1,
    "reload_interval_sec": 30,
    "keywords": KEYWORDS,
    "cluster_keywords": CLUSTER_KEYWORDS,
    "sentiment": {
        "positive": POSITIVE_WORDS,
        "negative": NEGATIVE_WORDS,
    },
    "similarity": {
        "stock_bonus": 4,
        "topic_bonus": 2,
        # (Jaccard 下限, 加分)，由高到低
        "bigram_tiers": [[0.6, 3], [0.4, 2], [0.25, 1]],
    },
    "cluster_threshold": 3,
    # 聚合卡片里列出前几则
    "cluster_preview_limit": 10,
    # 相对路径补全
    "link_bases": {
        "yahoo": "https://tw.stock.yahoo.com",
        "udn": "https://udn.com",
    },
    "source_options": [
        {"value": "", "label": "全部"},
        {"value": "ltn", "label": "自由財經"},
        {"value": "udn", "label": "聯合財經"},
        {"value": "apple", "label": "蘋果財經"},
        {"value": "yahoo", "label": "Yahoo 財經"},
        {"value": "ettoday", "label": "ETtoday 財經"},
        {"value": "cna", "label": "中央社財經"},
        {"value": "pts", "label": "公視財經"},
        {"value": "udn_rss", "label": "經濟日報 RSS"},
    ],
    "sources": [
        {
            "id": "gas_api",
            "type": "json",
            "url": "https://script.google.com/macros/s/AKfycbyN68pVGA7IVhWHLL2uCGLFeQskDidBvzsY227NxL25LC1Lf4c6-LtmQoYwY2_1zA0d6A/exec",
            "enabled": True,
        },
    ],
    "http": {
        "timeout_sec": 15.0,
        "user_agent": "news-hub/1.0",
    },
}


def _merge(base: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """顶层浅合并；两边都是 dict 的块再合并一层（避免过度魔法）"""
    out = copy.deepcopy(base)
    for k, v in (data or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = {**out[k], **v}
        else:
            out[k] = v
    return out


def load_cfg(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """读取 ops/config.yml 并合并到默认配置上。"""
    p = Path(path) if path else DEFAULT_CFG_PATH
    if not p.exists():
        return copy.deepcopy(DEFAULT_CFG)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"顶层必须是映射，实际是 {type(data).__name__}")
        return _merge(DEFAULT_CFG, data)
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"[config] 读取 {p} 失败，使用默认。err={e}", file=sys.stderr)
        return copy.deepcopy(DEFAULT_CFG)


class HubConfig:
    """配置容器，支持热加载；overrides 在文件之后再合并一次（调参/测试用）"""

    def __init__(self, path: Optional[Union[str, Path]] = None,
                 overrides: Optional[Dict[str, Any]] = None):
        self.path = Path(path) if path else DEFAULT_CFG_PATH
        self.overrides = overrides or {}
        self.config: Dict[str, Any] = {}
        self.last_reload = 0.0
        self._last_mtime: Optional[float] = None
        self._load()

    def _mtime(self) -> Optional[float]:
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def _load(self) -> None:
        self.config = _merge(load_cfg(self.path), self.overrides)
        self._last_mtime = self._mtime()
        self.last_reload = time.time()

    def should_reload(self) -> bool:
        interval = float(self.config.get("reload_interval_sec", 30))
        return time.time() - self.last_reload > interval

    def reload_if_needed(self) -> bool:
        """到点且文件 mtime 变了才重载，返回是否真的重载"""
        if not self.should_reload():
            return False
        self.last_reload = time.time()
        if self._mtime() == self._last_mtime:
            return False
        self._load()
        print("[config] 配置已热加载", file=sys.stderr)
        return True

    # ---------- 访问器 ----------
    @property
    def keywords(self) -> List[str]:
        return list(self.config.get("keywords") or [])

    @property
    def cluster_keywords(self) -> List[str]:
        return list(self.config.get("cluster_keywords") or [])

    @property
    def positive_words(self) -> List[str]:
        return list((self.config.get("sentiment") or {}).get("positive") or [])

    @property
    def negative_words(self) -> List[str]:
        return list((self.config.get("sentiment") or {}).get("negative") or [])

    @property
    def stock_bonus(self) -> int:
        return int((self.config.get("similarity") or {}).get("stock_bonus", 4))

    @property
    def topic_bonus(self) -> int:
        return int((self.config.get("similarity") or {}).get("topic_bonus", 2))

    @property
    def bigram_tiers(self) -> List[Tuple[float, int]]:
        tiers = (self.config.get("similarity") or {}).get("bigram_tiers") or []
        # 由高到低，命中第一档就停
        return sorted(((float(t), int(s)) for t, s in tiers), reverse=True)

    @property
    def cluster_threshold(self) -> int:
        return int(self.config.get("cluster_threshold", 3))

    @property
    def cluster_preview_limit(self) -> int:
        return int(self.config.get("cluster_preview_limit", 10))

    @property
    def link_bases(self) -> Dict[str, str]:
        return dict(self.config.get("link_bases") or {})

    @property
    def source_options(self) -> List[Dict[str, str]]:
        return list(self.config.get("source_options") or [])

    @property
    def sources(self) -> List[Dict[str, Any]]:
        return list(self.config.get("sources") or [])

    @property
    def http(self) -> Dict[str, Any]:
        return dict(self.config.get("http") or {})


_hub_config: Optional[HubConfig] = None


def get_config() -> HubConfig:
    """全局配置实例（首次调用时加载）"""
    global _hub_config
    if _hub_config is None:
        _hub_config = HubConfig()
    return _hub_config
