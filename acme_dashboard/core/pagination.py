"""Pagination — page counts and the numbered pagination strip.

Invariants:
    - total_pages is never negative; an empty listing has 0 pages
    - generate_pagination shows at most 7 slots; "..." marks elided ranges
    - Page numbers are 1-based

Design Decisions:
    - Strip computed server-side so every client renders the same window
"""

ELLIPSIS = "..."


def total_pages(count: int, per_page: int) -> int:
    """Number of pages needed to show `count` rows, `per_page` at a time."""
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    return -(-max(count, 0) // per_page)


def generate_pagination(current_page: int, pages: int) -> list[int | str]:
    """Build the pagination strip for the given page.

    Up to 7 pages are all shown. Otherwise the strip keeps the first and
    last pages visible and puts ellipses around the current window.
    """
    if pages <= 7:
        return list(range(1, pages + 1))
    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, pages - 1, pages]
    if current_page >= pages - 2:
        return [1, 2, ELLIPSIS, pages - 2, pages - 1, pages]
    return [
        1, ELLIPSIS,
        current_page - 1, current_page, current_page + 1,
        ELLIPSIS, pages,
    ]
