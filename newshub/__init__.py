# -*- coding: utf-8 -*-
"""news-hub：财经新闻整合，事件聚合 / 情绪 / 关键字命中率"""

__version__ = "1.0.0"
