# -*- coding: utf-8 -*-
"""
dummy_gen.py
本地离线用的样本新闻：台股 / 匯率 / 房市 / 勞保 等常见标题，
带装饰前缀、媒体尾巴、股票代码，方便手动看聚合效果。
"""

import datetime
import random
from typing import List, Optional

from newshub.models import NewsItem
from newshub.utils import TIMESTAMP_FORMAT

# (来源代码, 显示名, 标题, 链接)
TEMPLATES = [
    ("ltn", "自由財經", "【快訊】台積電法說會創新高 外資喊買", "https://ec.ltn.com.tw/article/breakingnews/1"),
    ("udn", "聯合財經", "台積電法說會創新高 AI需求續強｜聯合新聞網", "/news/story/7238/2"),
    ("yahoo", "Yahoo 財經", "2330台積電盤中勁揚 台股收紅", "/news/3"),
    ("cna", "中央社財經", "日股重挫創近月新低 東證指數失守", "https://www.cna.com.tw/news/4"),
    ("ettoday", "ETtoday 財經", "（影）日股暴跌 日經指數重挫逾2%", "https://finance.ettoday.net/news/5"),
    ("pts", "公視財經", "新台幣午盤升值 匯率回到31元", "https://news.pts.org.tw/article/6"),
    ("ltn", "自由財經", "央行理監事會 利率維持不變 房市管制續行", "https://ec.ltn.com.tw/article/breakingnews/7"),
    ("udn", "聯合財經", "勞保會不會倒？退休金改革再引關注", "/news/story/7239/8"),
    ("apple", "蘋果財經", "高股息ETF 00878 配息公布 殖利率看好", "https://tw.nextapple.com/finance/9"),
    ("cna", "中央社財經", "台美關稅談判進展 半導體受惠", "https://www.cna.com.tw/news/10"),
    ("yahoo", "Yahoo 財經", "2330 外資連買 目標價上修", "/news/11"),
    ("udn_rss", "經濟日報 RSS", "美股四大指數收高 科技股領漲", "https://money.udn.com/money/story/12"),
]


def generate_items(now: Optional[datetime.datetime] = None,
                   shuffle: bool = False,
                   seed: Optional[int] = None) -> List[NewsItem]:
    """
    产生一批样本 NewsItem；时间从 now 往回每则间隔 3 分钟（第一则最新）

    参数:
        now: 基准时间，默认当下
        shuffle: 是否打乱顺序（聚合结果依输入顺序，可用来观察差异）
        seed: 打乱用的随机种子
    """
    now = now or datetime.datetime.now()
    rows = list(TEMPLATES)
    if shuffle:
        random.Random(seed).shuffle(rows)

    items: List[NewsItem] = []
    for i, (source, name, title, link) in enumerate(rows):
        ts = (now - datetime.timedelta(minutes=3 * i)).strftime(TIMESTAMP_FORMAT)
        items.append(NewsItem(
            source=source,
            source_name=name,
            title=title,
            link=link,
            timestamp=ts,
            raw_time=None,
        ))
    return items
