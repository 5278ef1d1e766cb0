"""Page number window for pagination controls."""

ELLIPSIS = None


def visible_pages(current: int, pages: int) -> list[int | None]:
    """Page numbers to render around the current page.

    The first page, the last page and the immediate neighbours of the
    current page are always shown. ``None`` marks a gap: at position 2
    when the current page is past 3, and at ``pages - 1`` when the
    current page is more than two pages from the end.

    Example:
        visible_pages(5, 10)

        → [1, None, 4, 5, 6, None, 10]
    """
    window: list[int | None] = []

    for page in range(1, pages + 1):
        is_edge = page in (1, pages)
        is_near_current = abs(page - current) <= 1

        if is_edge or is_near_current:
            window.append(page)
        elif (page == 2 and current > 3) or (
            page == pages - 1 and current < pages - 2
        ):
            window.append(ELLIPSIS)

    return window


def previous_page(current: int) -> int:
    return max(1, current - 1)


def next_page(current: int, pages: int) -> int:
    return min(max(pages, 1), current + 1)
