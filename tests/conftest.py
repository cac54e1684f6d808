# -*- coding: utf-8 -*-
"""
pytest 共用 fixtures
"""
import sys
from pathlib import Path

import pytest

# === 保证能正确 import newshub ===
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from newshub.config import HubConfig
from newshub.models import NewsItem


@pytest.fixture
def cfg(tmp_path):
    """只用内置默认值的配置（不读 ops/config.yml）"""
    return HubConfig(tmp_path / "missing.yml")


@pytest.fixture
def make_item():
    """NewsItem 工厂：时间用 09:MM:00 这种定宽字符串"""
    def _make(title, minute=0, source="ltn", source_name="自由財經", link=""):
        return NewsItem(
            source=source,
            source_name=source_name,
            title=title,
            link=link,
            timestamp=f"2025-11-18 09:{minute:02d}:00",
        )
    return _make
