"""
Models for SkyVendas.
"""

from .collection import CollectionState, CollectionStatus, ExhaustionReason, FetchError
from .listings import Ad, AdProduct, ListingModel, Post, Product, UserSummary
from .pagination import PageRequest, PageResult, coerce_page

__all__ = [
    # Collection state
    "CollectionState",
    "CollectionStatus",
    "ExhaustionReason",
    "FetchError",
    # Items
    "ListingModel",
    "Product",
    "Ad",
    "AdProduct",
    "Post",
    "UserSummary",
    # Pagination
    "PageRequest",
    "PageResult",
    "coerce_page",
]
