"""
Latest releases: newest products with a rotating selection.
"""

from core.models.catalog import OrderBy
from core.selection.showcase import ShowcaseService
from core.utils.constants import SORT_NEWEST


class LatestReleasesService(ShowcaseService):
    """Showcase ranked by creation date; the newest items are always included."""

    order_by = OrderBy.RECENCY
    sort_hint = SORT_NEWEST
