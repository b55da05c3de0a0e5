"""视频素材搜索。

真实平台接入需要开放平台权限，这里提供可替换的搜索接口与一个确定性的
示例实现：同一关键词与分页参数总是返回相同结果。
"""

from __future__ import annotations

import hashlib
from typing import Any, Protocol


class VideoSearchProvider(Protocol):
    data_source: str
    note: str | None

    def search(self, keyword: str, page: int, page_size: int) -> tuple[list[dict[str, Any]], int]:
        """返回 (当前页结果, 总数)。"""
        ...


class MockVideoSearchProvider:
    """示例数据搜索实现。"""

    data_source = "mock"
    note = "示例数据，接入视频平台开放接口后替换为真实搜索结果。"

    TOTAL_RESULTS = 50
    TITLE_TEMPLATES = (
        ("{keyword}直播带货实战技巧", "三农主播"),
        ("农产品{keyword}销售话术大全", "乡村达人"),
        ("{keyword}直播间互动技巧分享", "助农主播"),
        ("{keyword}直播爆款文案模板", "农哥直播间"),
        ("{keyword}带货直播开场白技巧", "鲜果优选"),
    )

    @staticmethod
    def _digest(keyword: str, index: int) -> str:
        return hashlib.sha1(f"{keyword}:{index}".encode("utf-8")).hexdigest()

    def _item(self, keyword: str, index: int) -> dict[str, Any]:
        digest = self._digest(keyword, index)
        seed = int(digest[:12], 16)
        title, author = self.TITLE_TEMPLATES[index % len(self.TITLE_TEMPLATES)]
        return {
            "id": f"mock_{digest[:16]}",
            "title": title.format(keyword=keyword),
            "author": author,
            "duration": 600 + seed % 3600,
            "likes": 1000 + (seed >> 8) % 100000,
            "plays": 10000 + (seed >> 16) % 1000000,
            "cover_url": f"https://picsum.photos/seed/{digest[:16]}/400/300",
            "source_url": "",
            "source_platform": "douyin",
            "is_real_data": False,
            "data_source": self.data_source,
        }

    def search(self, keyword: str, page: int, page_size: int) -> tuple[list[dict[str, Any]], int]:
        start = (page - 1) * page_size
        end = min(start + page_size, self.TOTAL_RESULTS)
        return [self._item(keyword, i) for i in range(start, end)], self.TOTAL_RESULTS
