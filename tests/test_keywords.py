# -*- coding: utf-8 -*-
"""
关键字命中率统计的单元测试
"""
import pytest

from newshub.keywords import keyword_stats


def test_keyword_stats_counts_items_not_occurrences(cfg, make_item):
    items = [
        make_item("台積電大漲"),
        make_item("台股重挫 台積電台積電"),
        make_item("美股收高"),
        make_item("ETF etf 規模創高"),
    ]
    stats = keyword_stats(items, cfg.keywords)

    assert [(s.keyword, s.hits) for s in stats] == [
        ("台積電", 2), ("台股", 1), ("美股", 1), ("ETF", 1),
    ]
    for s in stats:
        assert s.hit_rate == pytest.approx(s.hits / len(items))
        assert 0 < s.hit_rate <= 1


def test_keyword_stats_case_insensitive(make_item):
    stats = keyword_stats([make_item("ai伺服器需求"), make_item("Nvidia AI")], ["AI"])
    assert len(stats) == 1
    assert stats[0].keyword == "AI"
    assert stats[0].hits == 2
    assert stats[0].hit_rate == 1.0


def test_keyword_stats_omits_zero_hits(cfg, make_item):
    stats = keyword_stats([make_item("今天天氣很好")], cfg.keywords)
    assert stats == []


def test_ties_keep_keyword_list_order(make_item):
    items = [make_item("房市 勞保"), make_item("台股")]
    stats = keyword_stats(items, ["勞保", "台股", "房市"])
    assert [s.keyword for s in stats] == ["勞保", "台股", "房市"]


def test_keyword_stats_empty_input(cfg):
    assert keyword_stats([], cfg.keywords) == []
