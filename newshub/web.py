# coding: utf-8
# 财经新闻整合看板：streamlit run newshub/web.py
from __future__ import annotations

import html
from typing import List

import pandas as pd
import streamlit as st

from newshub.clusterer import cluster_preview
from newshub.collector import collect, fix_link
from newshub.config import get_config
from newshub.filters import SENTIMENT_ALL
from newshub.models import EventCluster, KeywordStat, NewsItem
from newshub.pipeline import build_snapshot
from newshub.sentiment import NEGATIVE, NEUTRAL, POSITIVE, get_sentiment, sentiment_label

st.set_page_config(page_title="財經新聞整合儀表板", page_icon="📰", layout="wide")

# ========== 样式 ==========
st.markdown("""
<style>
.header-small{color:#8b8b8b;font-size:.9rem;margin-top:2px}
.news-card{border-bottom:1px solid rgba(255,255,255,.08);padding:8px 4px}
.news-card-header{display:flex;justify-content:space-between;font-size:13px;color:#a0a0a0}
.source-tag{padding:1px 8px;border-radius:999px;background:rgba(13,110,253,.15);margin-right:6px}
.sentiment-tag{padding:1px 8px;border-radius:999px}
.sentiment-positive{background:rgba(220,53,69,.18)}
.sentiment-negative{background:rgba(25,135,84,.18)}
.sentiment-neutral{background:rgba(160,160,160,.18)}
.news-title{font-size:15px;color:inherit;text-decoration:none}
.news-title:hover{text-decoration:underline}
.cluster-list{margin:4px 0 0 18px;font-size:13px}
.cluster-more{color:#909090;list-style:none}
</style>
""", unsafe_allow_html=True)

cfg = get_config()
cfg.reload_if_needed()


# ========== 抓资料 ==========
@st.cache_data(ttl=300, show_spinner="正在載入新聞...")
def _load_news() -> List[NewsItem]:
    return collect(cfg)


# ========== 渲染 ==========
def _sentiment_tag(s: str) -> str:
    return f"<span class='sentiment-tag sentiment-{s}'>{sentiment_label(s)}</span>"


def _link(item: NewsItem, cls: str = "") -> str:
    href = html.escape(fix_link(item, cfg.link_bases), quote=True)
    klass = f" class='{cls}'" if cls else ""
    return f"<a{klass} href='{href}' target='_blank' rel='noopener noreferrer'>{html.escape(item.title)}</a>"


def render_news_card(item: NewsItem) -> str:
    s = get_sentiment(item.title, cfg.positive_words, cfg.negative_words)
    raw = f"｜原始：{html.escape(item.raw_time)}" if item.raw_time else ""
    return (
        "<article class='news-card'><div class='news-card-header'><div>"
        f"<span class='source-tag'>{html.escape(item.source_name)}</span>{_sentiment_tag(s)}"
        f"</div><span>抓取：{html.escape(item.timestamp)}{raw}</span></div>"
        f"{_link(item, 'news-title')}</article>"
    )


def render_cluster_card(cluster: EventCluster) -> str:
    shown, more = cluster_preview(cluster, cfg.cluster_preview_limit)
    rows = "".join(f"<li>{_link(n)}</li>" for n in shown)
    if more > 0:
        rows += f"<li class='cluster-more'>（還有 {more} 則相關新聞）</li>"
    return (
        "<article class='news-card'><div class='news-card-header'><div>"
        f"<span class='source-tag'>{html.escape(cluster.source_name)}</span>{_sentiment_tag(cluster.sentiment)}"
        f"</div><span>最新抓取：{html.escape(cluster.latest_timestamp)} ｜ 本事件共 {cluster.count} 則</span></div>"
        f"<div class='news-title'>{html.escape(cluster.title)}</div>"
        f"<ul class='cluster-list'>{rows}</ul></article>"
    )


def keyword_frame(stats: List[KeywordStat]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"關鍵字": s.keyword, "命中新聞數": s.hits, "命中率": round(s.hit_rate * 100, 1)} for s in stats],
        columns=["關鍵字", "命中新聞數", "命中率"],
    )


# ========== 顶栏 ==========
title_col, btn_col = st.columns([0.85, 0.15])
with title_col:
    st.markdown("## 財經新聞整合儀表板")
    st.markdown("<div class='header-small'>聚合多家財經媒體最新標題，搭配事件聚合、關鍵字命中率與情緒過濾。</div>",
                unsafe_allow_html=True)
with btn_col:
    if st.button("重新整理", use_container_width=True):
        _load_news.clear()

# ========== 筛选工具列 ==========
source_options = cfg.source_options or [{"value": "", "label": "全部"}]
sentiment_options = {SENTIMENT_ALL: "全部", POSITIVE: "偏正向", NEUTRAL: "中性", NEGATIVE: "偏負向"}
view_options = {"list": "列表", "cluster": "聚合", "keyword": "關鍵字"}

c1, c2, c3, c4 = st.columns([1, 1.4, 1, 1.2], gap="small")
with c1:
    source_opt = st.selectbox("來源", source_options, format_func=lambda o: o.get("label", ""))
with c2:
    keyword = st.text_input("標題關鍵字", placeholder="例如：台積電、美元、利率...")
with c3:
    sentiment = st.selectbox("情緒", list(sentiment_options), format_func=sentiment_options.get)
with c4:
    view = st.radio("視圖", list(view_options), format_func=view_options.get, horizontal=True)

# ========== 计算 & 展示 ==========
news = _load_news()
snapshot = build_snapshot(news, source=source_opt.get("value", ""), keyword=keyword,
                          sentiment=sentiment, cfg=cfg)

if view == "cluster":
    shown_count, unit = len(snapshot.clusters), "群事件"
elif view == "keyword":
    shown_count, unit = len(snapshot.keyword_stats), "個關鍵字"
else:
    shown_count, unit = len(snapshot.filtered), "則新聞"
st.caption(f"共 {snapshot.total} 則｜目前顯示 {shown_count} {unit}")

if not news:
    st.error("載入失敗或暫無新聞，請稍後再試")

st.markdown("---")

if view == "list":
    if not snapshot.filtered:
        st.info("目前沒有符合條件的新聞")
    else:
        st.markdown("".join(render_news_card(n) for n in snapshot.filtered), unsafe_allow_html=True)

elif view == "cluster":
    if not snapshot.clusters:
        st.info("目前沒有可聚合的事件")
    else:
        st.markdown("".join(render_cluster_card(c) for c in snapshot.clusters), unsafe_allow_html=True)

else:
    if not snapshot.keyword_stats:
        st.info("目前沒有可統計的關鍵字命中率（可能是新聞數太少）。")
    else:
        st.subheader("常用關鍵字命中率")
        st.caption(f"基於目前篩選後的 {len(snapshot.filtered)} 則新聞，統計 {len(cfg.keywords)} "
                   "個常用關鍵字的出現次數與命中率（已套用情緒過濾）。")
        df = keyword_frame(snapshot.keyword_stats)
        left, right = st.columns([0.45, 0.55])
        with left:
            st.dataframe(df, use_container_width=True, hide_index=True,
                         column_config={"命中率": st.column_config.NumberColumn(format="%.1f%%")})
        with right:
            st.caption("命中率長條圖")
            st.bar_chart(df.set_index("關鍵字")["命中率"])
