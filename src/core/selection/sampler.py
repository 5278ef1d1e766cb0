"""
Featured and latest product selection.

Builds a pool of the best candidates (most recent or most popular),
keeps a guaranteed slice from the front of that pool and fills the rest
of the selection with a uniformly shuffled pick from the remainder.
"""

import math
import random
from collections.abc import Iterable, Sequence

from aws_lambda_powertools import Logger

from core.models.catalog import CatalogItem, OrderBy, SelectionRequest
from core.models.errors import ValidationError
from core.utils.constants import (
    ERROR_CODE_INVALID_SELECTION,
    FEATURED_PICK_MAX,
    FEATURED_PICK_MIN,
    GUARANTEED_FRACTION,
    POOL_SIZE,
)
from core.utils.time import timestamp_sort_key
from core.utils.validators import parse_model

logger = Logger(UTC=True)


class CatalogSampler:
    """
    Select a bounded, partially randomized subset of catalog items.

    Typical usage:
    1. Rank the candidates by recency or popularity
    2. Keep the top ``pool_size`` as the pool
    3. Return the guaranteed slice followed by a random pick

    The random source is injectable so selections can be reproduced.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        pool_size: int = POOL_SIZE,
        guaranteed_fraction: float = GUARANTEED_FRACTION,
    ) -> None:
        self._rng = rng or random.Random()
        self._pool_size = pool_size
        self._guaranteed_fraction = guaranteed_fraction

    def select_sample(
        self,
        items: Sequence[CatalogItem],
        order_by: OrderBy,
        min_count: int,
        max_count: int,
    ) -> list[CatalogItem]:
        """
        Select between ``min_count`` and ``max_count`` items.

        Args:
            items: Candidate items (never mutated)
            order_by: Ranking criterion for the pool
            min_count: Smallest selection size (> 0)
            max_count: Largest selection size (>= min_count)

        Returns:
            ``min(requested_count, len(pool))`` items. The first
            ``guaranteed_count`` items are the top of the pool in ranked
            order whenever the pool is larger than the requested count.

        Raises:
            ValidationError: If the count range is invalid

        Example:
            items = [a(2024-01-03), b(2024-01-01), c(2024-01-02)]
            select_sample(items, OrderBy.RECENCY, 2, 2)

            → [a, c] or [a, b]
        """
        request = parse_model(
            SelectionRequest,
            {
                "min_count": min_count,
                "max_count": max_count,
                "pool_size": self._pool_size,
                "guaranteed_fraction": self._guaranteed_fraction,
            },
            message="Invalid selection bounds",
        )

        if not items:
            return []

        pool = self.build_pool(items, order_by, pool_size=request.pool_size)
        requested_count = self._rng.randint(request.min_count, request.max_count)

        if len(pool) <= requested_count:
            logger.debug(
                "Pool smaller than requested count, returning whole pool",
                extra={"pool_size": len(pool), "requested_count": requested_count},
            )
            return pool

        guaranteed_count = max(
            1, math.floor(requested_count * request.guaranteed_fraction)
        )
        guaranteed = pool[:guaranteed_count]

        remaining = pool[guaranteed_count:]
        self._rng.shuffle(remaining)
        random_pick = remaining[: requested_count - guaranteed_count]

        logger.debug(
            "Selection sampled",
            extra={
                "order_by": order_by.value,
                "pool_size": len(pool),
                "requested_count": requested_count,
                "guaranteed_count": guaranteed_count,
            },
        )

        return guaranteed + random_pick

    def pick_featured(
        self,
        items: Sequence[CatalogItem],
        count: int = FEATURED_PICK_MIN,
    ) -> list[CatalogItem]:
        """
        Pick a uniformly shuffled handful of items.

        ``count`` is clamped to [FEATURED_PICK_MIN, FEATURED_PICK_MAX].
        Lists no larger than the count are returned as-is (copied).
        """
        product_count = min(max(count, FEATURED_PICK_MIN), FEATURED_PICK_MAX)

        candidates = list(items)
        if len(candidates) <= product_count:
            return candidates

        self._rng.shuffle(candidates)
        return candidates[:product_count]

    @classmethod
    def build_pool(
        cls,
        items: Iterable[CatalogItem],
        order_by: OrderBy,
        *,
        pool_size: int = POOL_SIZE,
    ) -> list[CatalogItem]:
        """Rank a copy of the valid items and keep the top ``pool_size``."""
        candidates = cls.unique_items(items)
        ranked = sorted(candidates, key=cls._sort_key(order_by), reverse=True)
        return ranked[:pool_size]

    @staticmethod
    def unique_items(items: Iterable[CatalogItem]) -> list[CatalogItem]:
        """Drop items without an id and repeated ids, keeping first occurrences."""
        seen: set[str] = set()
        unique: list[CatalogItem] = []
        skipped = 0

        for item in items:
            if not item.id or item.id in seen:
                skipped += 1
                continue
            seen.add(item.id)
            unique.append(item)

        if skipped:
            logger.warning(
                "Skipped items with missing or duplicate ids",
                extra={"skipped": skipped},
            )

        return unique

    @staticmethod
    def _sort_key(order_by: OrderBy):
        if order_by is OrderBy.RECENCY:
            return lambda item: timestamp_sort_key(item.created_at)
        if order_by is OrderBy.POPULARITY:
            return lambda item: item.popularity_score
        raise ValidationError(
            message=f"Unsupported ordering: {order_by}",
            error_code=ERROR_CODE_INVALID_SELECTION,
            details={"order_by": str(order_by)},
        )
