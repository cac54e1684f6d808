# newshub/main.py
# 串起：collector -> filter -> clusterer / keywords -> 输出
# 抓一次、算一次；要常驻看板请用 streamlit run newshub/web.py

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from newshub.clusterer import cluster_preview
from newshub.collector import collect, fix_link
from newshub.config import HubConfig
from newshub.filters import SENTIMENT_ALL
from newshub.models import DashboardSnapshot, NewsItem
from newshub.parsers.dummy_gen import generate_items
from newshub.pipeline import build_snapshot, snapshot_to_dict
from newshub.sentiment import SENTIMENTS, get_sentiment, sentiment_label

VIEWS = ("list", "cluster", "keyword")


def render_list(snapshot: DashboardSnapshot, cfg: HubConfig) -> List[str]:
    lines = []
    for n in snapshot.filtered:
        s = get_sentiment(n.title, cfg.positive_words, cfg.negative_words)
        raw = f"｜原始：{n.raw_time}" if n.raw_time else ""
        lines.append(f"[{n.source_name}][{sentiment_label(s)}] {n.title}")
        lines.append(f"    抓取：{n.timestamp}{raw}  {fix_link(n, cfg.link_bases)}")
    return lines


def render_clusters(snapshot: DashboardSnapshot, cfg: HubConfig) -> List[str]:
    lines = []
    for c in snapshot.clusters:
        lines.append(f"[{c.source_name}][{sentiment_label(c.sentiment)}] {c.title}")
        lines.append(f"    最新抓取：{c.latest_timestamp} ｜ 本事件共 {c.count} 則")
        shown, more = cluster_preview(c, cfg.cluster_preview_limit)
        for n in shown:
            lines.append(f"    - {n.title}  {fix_link(n, cfg.link_bases)}")
        if more > 0:
            lines.append(f"    （還有 {more} 則相關新聞）")
    return lines


def render_keywords(snapshot: DashboardSnapshot) -> List[str]:
    lines = [f"基於目前篩選後的 {len(snapshot.filtered)} 則新聞"]
    for s in snapshot.keyword_stats:
        bar = "█" * round(s.hit_rate * 20)
        lines.append(f"{s.keyword:<6} {s.hits:>4}  {s.hit_rate * 100:5.1f}%  {bar}")
    return lines


def status_line(snapshot: DashboardSnapshot, view: str) -> str:
    if view == "cluster":
        return f"共 {snapshot.total} 則｜目前顯示 {len(snapshot.clusters)} 群事件"
    if view == "keyword":
        return f"共 {snapshot.total} 則｜目前顯示 {len(snapshot.keyword_stats)} 個關鍵字"
    return f"共 {snapshot.total} 則｜目前顯示 {len(snapshot.filtered)} 則新聞"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newshub", description="财经新闻整合：事件聚合 / 情绪 / 关键字命中率")
    parser.add_argument("--config", default=None, help="配置文件路径（默认 ops/config.yml）")
    parser.add_argument("--demo", action="store_true", help="用本地样本数据，不走网络")
    parser.add_argument("--source", default="", help="来源代码，空表示全部")
    parser.add_argument("--keyword", default="", help="标题关键字")
    parser.add_argument("--sentiment", default=SENTIMENT_ALL, choices=(SENTIMENT_ALL,) + SENTIMENTS)
    parser.add_argument("--view", default="list", choices=VIEWS)
    parser.add_argument("--json", action="store_true", help="输出整份 JSON 结果")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = HubConfig(args.config)

    items: List[NewsItem] = generate_items() if args.demo else collect(cfg)
    snapshot = build_snapshot(items, source=args.source, keyword=args.keyword,
                              sentiment=args.sentiment, cfg=cfg)

    if args.json:
        print(json.dumps(snapshot_to_dict(snapshot, cfg), ensure_ascii=False, indent=2))
        return 0

    print(status_line(snapshot, args.view))
    if args.view == "cluster":
        lines = render_clusters(snapshot, cfg)
        empty_hint = "目前沒有可聚合的事件"
    elif args.view == "keyword":
        lines = render_keywords(snapshot) if snapshot.keyword_stats else []
        empty_hint = "目前沒有可統計的關鍵字命中率（可能是新聞數太少）。"
    else:
        lines = render_list(snapshot, cfg)
        empty_hint = "目前沒有符合條件的新聞"

    print("\n".join(lines) if lines else empty_hint)
    return 0


if __name__ == "__main__":
    sys.exit(main())
