# -*- coding: utf-8 -*-
"""
手动检查 ops/config.yml 里每个来源能不能连上、回传格式对不对。
Usage:
    python tests/check_sources.py
"""
import asyncio
import re
import sys
from pathlib import Path

import httpx

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from newshub.config import HubConfig

RSS_HINT_RE = re.compile(r"<(rss|feed|rdf)\b", re.I)


async def check_one(client: httpx.AsyncClient, src: dict):
    sid = src.get("id", "?")
    if not src.get("enabled", True):
        return (sid, "SKIP", "disabled")
    t = (src.get("type") or "").lower()
    if t == "dummy":
        return (sid, "OK", "dummy")
    url = src.get("url", "")
    if not (url.startswith("http://") or url.startswith("https://")):
        return (sid, "BAD", "missing http(s)://")
    try:
        r = await client.get(url, timeout=10)
    except httpx.HTTPError as e:
        return (sid, "ERR", str(e))
    kind = r.headers.get("content-type", "")
    if r.status_code != 200:
        return (sid, f"{r.status_code}", kind or "unknown")
    if t == "rss":
        ok = ("xml" in kind.lower()) or bool(RSS_HINT_RE.search(r.text[:2000]))
        return (sid, "OK" if ok else "BAD", kind or "xml")
    try:
        n = len((r.json() or {}).get("news", []))
    except ValueError:
        return (sid, "BAD", "not json")
    return (sid, "OK", f"{n} news")


async def main():
    cfg = HubConfig()
    async with httpx.AsyncClient(headers={"User-Agent": "news-hub/check"}, follow_redirects=True) as client:
        results = [await check_one(client, s) for s in cfg.sources]
    ok = [r for r in results if r[1] == "OK"]
    bad = [r for r in results if r[1] not in ("OK", "SKIP")]
    skip = [r for r in results if r[1] == "SKIP"]
    print("\n=== OK ===")
    for i, _, k in ok: print(f"{i:20} {k}")
    print("\n=== PROBLEM ===")
    for i, s, k in bad: print(f"{i:20} {s:>4}  {k}")
    print("\n=== SKIPPED ===")
    for i, _, k in skip: print(f"{i:20} {k}")


if __name__ == "__main__":
    asyncio.run(main())
