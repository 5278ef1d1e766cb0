"""
Pydantic models for catalog listing filters.
"""

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.models.errors import FilterError
from core.utils.constants import MAX_LIMIT
from core.utils.validators import parse_model

QueryParams = dict[str, str | int | float]


class ProductFilters(BaseModel):
    """
    Query parameters accepted by the catalog listing endpoint.

    Field names follow Python conventions; aliases match the API.
    Unset fields are never sent.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    # Pagination
    page: int | None = Field(None, ge=1, description="Requested page (1-based)")
    limit: int | None = Field(
        None, ge=1, le=MAX_LIMIT, description="Results per page (1-100)"
    )

    # Matching
    name: str | None = Field(None, description="Substring match on product name")
    category: str | None = None
    collection: str | None = None

    # Price range
    min_price: float | None = Field(None, alias="minPrice", ge=0)
    max_price: float | None = Field(None, alias="maxPrice", ge=0)

    # Flags
    in_stock: bool | None = Field(None, alias="inStock")
    has_discount: bool | None = Field(None, alias="hasDiscount")

    # Sorting
    sort: str | None = Field(None, description="Server-side sort preset")
    sort_by: str | None = Field(None, alias="sortBy")
    sort_order: Literal["asc", "desc"] | None = Field(None, alias="sortOrder")

    @model_validator(mode="after")
    def validate_price_range(self) -> "ProductFilters":
        """Ensure min_price is not greater than max_price."""
        if self.min_price is not None and self.max_price is not None:
            if self.min_price > self.max_price:
                raise ValueError("minPrice must be less than or equal to maxPrice")
        return self

    def merge(self, other: "ProductFilters") -> "ProductFilters":
        """
        Return new filters updated with the fields explicitly set on ``other``.

        The combination is validated again, so two filter sets that are
        each valid cannot merge into an invalid price range.

        Raises:
            FilterError: If the merged filters are invalid
        """
        return parse_model(
            ProductFilters,
            {
                **self.model_dump(exclude_unset=True),
                **other.model_dump(exclude_unset=True),
            },
            message="Invalid filter combination",
            error_cls=FilterError,
        )

    def without_pagination(self) -> "ProductFilters":
        return self.model_copy(update={"page": None, "limit": None})

    def to_query_params(self) -> QueryParams:
        """
        Serialize to query string parameters.

        Booleans are sent as ``"true"`` only when set; ``False`` and
        ``None`` are omitted.
        """
        params: QueryParams = {}
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if isinstance(value, bool):
                if value:
                    params[key] = "true"
                continue
            if isinstance(value, str) and not value:
                continue
            params[key] = value
        return params


class FilterFormValues(BaseModel):
    """Raw values captured by the product filter form."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    category: str = ""
    min_price: str = Field("", alias="minPrice")
    max_price: str = Field("", alias="maxPrice")
    in_stock: bool = Field(False, alias="inStock")
    sort_by: str = Field("", alias="sortBy")
    sort_order: str = Field("", alias="sortOrder")

    def to_api(self) -> ProductFilters:
        """
        Convert form values into API filters.

        Empty strings are dropped and prices that are not numbers are
        ignored rather than rejected.

        Raises:
            pydantic.ValidationError: If the converted values are out of range
        """
        result: dict[str, Any] = {}

        if self.category:
            result["category"] = self.category
        if self.in_stock:
            result["in_stock"] = True
        if self.sort_by:
            result["sort_by"] = self.sort_by
        if self.sort_order:
            result["sort_order"] = self.sort_order.lower()

        min_price = self._parse_number(self.min_price)
        if min_price is not None:
            result["min_price"] = min_price

        max_price = self._parse_number(self.max_price)
        if max_price is not None:
            result["max_price"] = max_price

        return ProductFilters(**result)

    @staticmethod
    def _parse_number(value: str) -> float | None:
        if not value:
            return None
        try:
            number = float(value.replace(",", "."))
        except ValueError:
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return number
