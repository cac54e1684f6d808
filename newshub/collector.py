# -*- coding: utf-8 -*-
"""
collector.py
读取配置里的 sources，按 type 抓取并转成 NewsItem：
- json：后端 API（{"news": [...]}）
- rss：RSS/Atom
- dummy：本地样本，不走网络
每个来源独立容错：失败只打印并回传空列表，不影响其它来源。
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Dict, List, Optional

import httpx

from newshub.config import HubConfig, get_config
from newshub.models import NewsItem
from newshub.parsers.dummy_gen import generate_items
from newshub.parsers.json_default import parse_json
from newshub.parsers.rss_default import parse_rss


def fix_link(item: NewsItem, link_bases: Optional[Dict[str, str]] = None) -> str:
    """让相对路径的连结变成完整网址；未知来源原样返回"""
    link = item.link
    if link and link.startswith("/"):
        if link_bases is None:
            link_bases = get_config().link_bases
        base = link_bases.get(item.source)
        if base:
            link = base.rstrip("/") + link
    return link


def _make_client(cfg: HubConfig) -> httpx.AsyncClient:
    http = cfg.http
    return httpx.AsyncClient(
        timeout=float(http.get("timeout_sec", 15.0)),
        headers={"User-Agent": http.get("user_agent", "news-hub/1.0")},
        follow_redirects=True,  # GAS 的 exec 会 302 到 googleusercontent
    )


def _source_names(cfg: HubConfig) -> Dict[str, str]:
    return {o.get("value", ""): o.get("label", "") for o in cfg.source_options if o.get("value")}


async def fetch_news(url: str, client: httpx.AsyncClient,
                     source_id: str = "gas_api",
                     source_names: Optional[Dict[str, str]] = None) -> List[NewsItem]:
    """
    抓后端 API 一次。HTTP 非 200、连线错误、JSON 坏掉都只打印，回传 []
    """
    try:
        resp = await client.get(url)
    except httpx.HTTPError as e:
        print(f"[collector] {source_id} 请求失败: {e!r}", file=sys.stderr)
        return []

    if resp.status_code != 200:
        print(f"[collector] {source_id} 响应失败 status={resp.status_code}", file=sys.stderr)
        return []

    try:
        data = resp.json()
    except ValueError as e:
        print(f"[collector] {source_id} JSON 解析失败: {e}", file=sys.stderr)
        return []

    items = parse_json(data, source_id, source_names)
    print(f"[collector] {source_id} 取得 {len(items)} 则", file=sys.stderr)
    return items


async def fetch_rss(url: str, client: httpx.AsyncClient,
                    source_id: str, source_name: str = "") -> List[NewsItem]:
    try:
        resp = await client.get(url)
    except httpx.HTTPError as e:
        print(f"[rss] {source_id} 请求失败: {e!r}", file=sys.stderr)
        return []

    if resp.status_code != 200:
        print(f"[rss] {source_id} 响应失败 status={resp.status_code}", file=sys.stderr)
        return []

    items = parse_rss(resp.text, source_id, source_name)
    print(f"[rss] {source_id} 取得 {len(items)} 则", file=sys.stderr)
    return items


async def _fetch_source(client: httpx.AsyncClient, src: Dict[str, Any], cfg: HubConfig) -> List[NewsItem]:
    t = (src.get("type", "") or "").strip().lower()
    source_id = src.get("id", "")
    url = src.get("url", "")
    names = _source_names(cfg)

    if t == "json":
        return await fetch_news(url, client, source_id, names)
    if t == "rss":
        name = src.get("name") or names.get(source_id, "")
        return await fetch_rss(url, client, source_id, name)
    if t == "dummy":
        return generate_items()

    print(f"[collector] 未知类型: {t} ({source_id})，跳过", file=sys.stderr)
    return []


async def collect_all(cfg: Optional[HubConfig] = None,
                      client: Optional[httpx.AsyncClient] = None) -> List[NewsItem]:
    """
    并发抓所有 enabled 的来源，结果按 sources 顺序串起来。
    client 可外部传入（测试用 MockTransport）；否则内部建一个并在结束时关闭。
    """
    cfg = cfg or get_config()
    sources = [s for s in cfg.sources if s.get("enabled", True)]
    if not sources:
        print("[collector] 没有启用的来源", file=sys.stderr)
        return []

    own_client = client is None
    if own_client:
        client = _make_client(cfg)
    try:
        results = await asyncio.gather(*(_fetch_source(client, s, cfg) for s in sources))
    finally:
        if own_client:
            await client.aclose()

    items: List[NewsItem] = []
    for batch in results:
        items.extend(batch)
    print(f"[collector] {len(sources)} 个来源共 {len(items)} 则", file=sys.stderr)
    return items


def collect(cfg: Optional[HubConfig] = None) -> List[NewsItem]:
    """同步入口（CLI / Streamlit 用）"""
    return asyncio.run(collect_all(cfg))
