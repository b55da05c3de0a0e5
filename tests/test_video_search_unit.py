from __future__ import annotations

from agriscript.application.services.video_search_service import MockVideoSearchProvider


def test_mock_search_is_deterministic():
    provider = MockVideoSearchProvider()
    first, total = provider.search("苹果", 1, 10)
    second, _ = MockVideoSearchProvider().search("苹果", 1, 10)

    assert total == 50
    assert first == second
    assert len(first) == 10
    assert first[0]["title"] == "苹果直播带货实战技巧"
    assert all(item["is_real_data"] is False for item in first)


def test_mock_search_pages_do_not_overlap():
    provider = MockVideoSearchProvider()
    page1, _ = provider.search("脐橙", 1, 10)
    page2, _ = provider.search("脐橙", 2, 10)
    assert not {v["id"] for v in page1} & {v["id"] for v in page2}


def test_mock_search_last_page_is_partial():
    provider = MockVideoSearchProvider()
    items, total = provider.search("大米", 5, 12)
    assert total == 50
    assert len(items) == 2
    beyond, _ = provider.search("大米", 9, 10)
    assert beyond == []


def test_mock_search_differs_by_keyword():
    provider = MockVideoSearchProvider()
    apple, _ = provider.search("苹果", 1, 5)
    rice, _ = provider.search("大米", 1, 5)
    assert [v["id"] for v in apple] != [v["id"] for v in rice]
