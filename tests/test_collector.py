# -*- coding: utf-8 -*-
"""
collector 与 parsers 的单元测试（不连网，用 httpx.MockTransport）
"""
import asyncio
import re

import httpx
import pytest

from newshub.collector import collect_all, fetch_news, fetch_rss, fix_link
from newshub.config import HubConfig
from newshub.models import NewsItem
from newshub.parsers.json_default import parse_json
from newshub.parsers.rss_default import parse_rss

API_PAYLOAD = {
    "news": [
        {
            "source": "yahoo",
            "sourceName": "Yahoo 財經",
            "title": "台股收紅 台積電領軍",
            "link": "/news/abc",
            "timestamp": "2025-11-18 09:30:00",
            "rawTime": "11/18 09:12",
        },
        {"source": "ltn", "title": "", "link": "https://x", "timestamp": "2025-11-18 09:31:00"},
        {"source": "cna", "title": "日股重挫", "link": "https://cna/1", "timestamp": "2025-11-18 09:32:00"},
    ]
}

RSS_TEXT = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
<title>經濟日報</title>
<item>
  <title>美股四大指數收高</title>
  <link>https://money.example/story/1</link>
  <pubDate>Tue, 18 Nov 2025 01:30:00 GMT</pubDate>
</item>
<item>
  <title></title>
  <link>https://money.example/story/2</link>
</item>
<item>
  <title>新台幣午盤升值</title>
  <link>https://money.example/story/3</link>
</item>
</channel></rss>
"""

TS_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def _run(coro):
    return asyncio.run(coro)


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ---------- fix_link ----------
@pytest.mark.parametrize("source, link, expected", [
    ("yahoo", "/news/3", "https://tw.stock.yahoo.com/news/3"),
    ("udn", "/news/story/7238/2", "https://udn.com/news/story/7238/2"),
    ("ltn", "/relative", "/relative"),
    ("yahoo", "https://tw.stock.yahoo.com/news/3", "https://tw.stock.yahoo.com/news/3"),
    ("udn", "", ""),
])
def test_fix_link(cfg, source, link, expected):
    item = NewsItem(source=source, source_name="", title="t", link=link, timestamp="")
    assert fix_link(item, cfg.link_bases) == expected


# ---------- parsers ----------
def test_parse_json_maps_api_fields():
    items = parse_json(API_PAYLOAD, "gas_api")
    assert [n.title for n in items] == ["台股收紅 台積電領軍", "日股重挫"]
    first = items[0]
    assert first.source == "yahoo"
    assert first.source_name == "Yahoo 財經"
    assert first.link == "/news/abc"
    assert first.timestamp == "2025-11-18 09:30:00"
    assert first.raw_time == "11/18 09:12"
    assert items[1].raw_time is None


def test_parse_json_fallbacks():
    items = parse_json([{"headline": "房市回溫", "url": "https://u"}], "udn", {"udn": "聯合財經"})
    (item,) = items
    assert item.source == "udn"
    assert item.source_name == "聯合財經"
    assert item.link == "https://u"
    assert TS_RE.fullmatch(item.timestamp)


def test_parse_json_unknown_shape(capsys):
    assert parse_json({"foo": 1}, "x") == []
    assert "[json_parser]" in capsys.readouterr().err
    assert parse_json({}, "x") == []


def test_parse_rss():
    items = parse_rss(RSS_TEXT, "udn_rss")
    assert [n.title for n in items] == ["美股四大指數收高", "新台幣午盤升值"]
    first = items[0]
    assert first.source == "udn_rss"
    assert first.source_name == "經濟日報"
    assert first.link == "https://money.example/story/1"
    assert TS_RE.fullmatch(first.timestamp)
    assert first.raw_time == "Tue, 18 Nov 2025 01:30:00 GMT"
    assert TS_RE.fullmatch(items[1].timestamp)
    assert items[1].raw_time is None


def test_parse_rss_explicit_name():
    items = parse_rss(RSS_TEXT, "udn_rss", "經濟日報 RSS")
    assert {n.source_name for n in items} == {"經濟日報 RSS"}


# ---------- fetch ----------
def test_fetch_news_ok():
    def handler(request):
        return httpx.Response(200, json=API_PAYLOAD)

    async def go():
        async with _client(handler) as client:
            return await fetch_news("https://api.test/exec", client)

    items = _run(go())
    assert len(items) == 2


@pytest.mark.parametrize("status, body", [
    (500, "oops"),
    (200, "<html>not json</html>"),
])
def test_fetch_news_bad_response_gives_empty(status, body, capsys):
    async def go():
        async with _client(lambda request: httpx.Response(status, text=body)) as client:
            return await fetch_news("https://api.test/exec", client)

    assert _run(go()) == []
    assert "[collector]" in capsys.readouterr().err


def test_fetch_news_transport_error_gives_empty():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    async def go():
        async with _client(handler) as client:
            return await fetch_news("https://api.test/exec", client)

    assert _run(go()) == []


def test_fetch_rss_ok():
    async def go():
        async with _client(lambda request: httpx.Response(200, text=RSS_TEXT)) as client:
            return await fetch_rss("https://rss.test/feed", client, "udn_rss", "經濟日報 RSS")

    assert len(_run(go())) == 2


def test_collect_all_keeps_source_order_and_isolates_failures(tmp_path):
    cfg = HubConfig(tmp_path / "missing.yml", overrides={"sources": [
        {"id": "broken", "type": "json", "url": "https://down.test/exec"},
        {"id": "gas_api", "type": "json", "url": "https://api.test/exec"},
        {"id": "udn_rss", "type": "rss", "url": "https://rss.test/feed"},
        {"id": "ftp", "type": "ftp", "url": "ftp://x"},
        {"id": "off", "type": "json", "url": "https://off.test/exec", "enabled": False},
    ]})
    seen = []

    def handler(request):
        seen.append(request.url.host)
        if request.url.host == "down.test":
            raise httpx.ConnectError("down", request=request)
        if request.url.host == "api.test":
            return httpx.Response(200, json=API_PAYLOAD)
        if request.url.host == "rss.test":
            return httpx.Response(200, text=RSS_TEXT)
        return httpx.Response(404)

    async def go():
        async with _client(handler) as client:
            return await collect_all(cfg, client)

    items = _run(go())
    assert [n.title for n in items] == ["台股收紅 台積電領軍", "日股重挫", "美股四大指數收高", "新台幣午盤升值"]
    # rss 来源没写 name，用 source_options 里的显示名
    assert items[2].source_name == "經濟日報 RSS"
    assert "off.test" not in seen


def test_collect_all_dummy_source(tmp_path):
    cfg = HubConfig(tmp_path / "missing.yml", overrides={"sources": [{"id": "demo", "type": "dummy"}]})
    items = _run(collect_all(cfg))
    assert len(items) > 0


def test_collect_all_no_sources(tmp_path):
    cfg = HubConfig(tmp_path / "missing.yml", overrides={"sources": []})
    assert _run(collect_all(cfg)) == []
