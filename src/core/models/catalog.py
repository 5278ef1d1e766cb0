"""Catalog item and selection models."""

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    field_validator,
    model_validator,
)

from core.models.pagination import PaginationEnvelope
from core.utils.constants import GUARANTEED_FRACTION, POOL_SIZE


class OrderBy(Enum):
    """Ordering criteria used to build a selection pool."""

    RECENCY = "RECENCY"
    POPULARITY = "POPULARITY"

    @classmethod
    def from_string(cls, value: str | None) -> "OrderBy":
        normalized = (value or cls.RECENCY.value).strip().upper()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown ordering: {value}")


class CatalogItem(BaseModel):
    """Product record returned by the catalog API.

    Only ``id``, ``created_at`` and ``popularity_score`` drive selection;
    the remaining fields are carried through untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", description="Unique product identifier")
    name: str | None = Field(None, description="Display name")
    description: str | None = None
    price: float | None = Field(None, ge=0)
    sale_price: float | None = Field(None, alias="salePrice", ge=0)
    image: str | None = None
    category: str | None = None
    collection: str | None = None
    count_in_stock: int | None = Field(None, alias="countInStock")

    created_at: str | None = Field(
        None, alias="createdAt", description="ISO-8601 creation timestamp"
    )
    updated_at: str | None = Field(None, alias="updatedAt")
    popularity_score: int = Field(
        0, alias="sales", ge=0, description="Units sold, used as popularity"
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> str:
        """Missing ids become empty strings so they can be filtered later."""
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("popularity_score", mode="before")
    @classmethod
    def default_popularity(cls, value: Any) -> Any:
        if value is None:
            return 0
        return value

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the catalog API field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SelectionRequest(BaseModel):
    """Bounds for a sampled selection."""

    min_count: StrictInt = Field(..., gt=0, description="Smallest selection size")
    max_count: StrictInt = Field(..., gt=0, description="Largest selection size")
    pool_size: StrictInt = Field(
        POOL_SIZE, gt=0, description="Top candidates eligible for sampling"
    )
    guaranteed_fraction: float = Field(
        GUARANTEED_FRACTION,
        ge=0,
        le=1,
        description="Share of the requested count taken unshuffled from the pool",
    )

    @model_validator(mode="after")
    def validate_count_range(self) -> "SelectionRequest":
        """Ensure min_count is not greater than max_count."""
        if self.min_count > self.max_count:
            raise ValueError("min_count must be less than or equal to max_count")
        return self


class CatalogPage(BaseModel):
    """One page of catalog items with its pagination envelope."""

    data: list[CatalogItem] = Field(default_factory=list)
    pagination: PaginationEnvelope = Field(default_factory=PaginationEnvelope.empty)
