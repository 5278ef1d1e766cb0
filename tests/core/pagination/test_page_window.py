import pytest

from core.pagination.page_window import next_page, previous_page, visible_pages


class TestVisiblePages:
    def test_middle_page_has_gaps_on_both_sides(self) -> None:
        assert visible_pages(5, 10) == [1, None, 4, 5, 6, None, 10]

    def test_first_page(self) -> None:
        assert visible_pages(1, 10) == [1, 2, None, 10]

    def test_last_page(self) -> None:
        assert visible_pages(10, 10) == [1, None, 9, 10]

    def test_short_listing_shows_every_page(self) -> None:
        assert visible_pages(2, 3) == [1, 2, 3]

    def test_near_start_has_no_leading_gap(self) -> None:
        assert visible_pages(3, 8) == [1, 2, 3, 4, None, 8]

    def test_single_page(self) -> None:
        assert visible_pages(1, 1) == [1]

    def test_no_pages(self) -> None:
        assert visible_pages(1, 0) == []


class TestPageSteps:
    @pytest.mark.parametrize("current,expected", [(1, 1), (2, 1), (7, 6)])
    def test_previous_page(self, current, expected) -> None:
        assert previous_page(current) == expected

    @pytest.mark.parametrize(
        "current,pages,expected",
        [(1, 3, 2), (3, 3, 3), (1, 0, 1)],
    )
    def test_next_page(self, current, pages, expected) -> None:
        assert next_page(current, pages) == expected
