"""Storefront Catalog Core Package."""

__version__ = "1.0.0"
__description__ = (
    "Catalog sampling, pagination sync and search for a storefront REST backend"
)

__all__ = ["storefront", "core"]
