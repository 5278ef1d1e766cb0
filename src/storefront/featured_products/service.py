"""
Featured products: best sellers with a rotating selection.
"""

from core.models.catalog import CatalogItem, OrderBy
from core.selection.showcase import ShowcaseService
from core.utils.constants import FEATURED_PICK_MIN, SORT_POPULAR


class FeaturedProductsService(ShowcaseService):
    """Showcase ranked by sales; the top sellers are always included."""

    order_by = OrderBy.POPULARITY
    sort_hint = SORT_POPULAR

    def quick_pick(self, count: int = FEATURED_PICK_MIN) -> list[CatalogItem]:
        """Uniform pick of 4 to 8 items from the snapshot, ignoring sales."""
        return self._sampler.pick_featured(self.items, count)
