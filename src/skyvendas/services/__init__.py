"""Services for SkyVendas."""

from .collection import PageFetcher, PagedCollection
from .fetchers import (
    ListKind,
    build_collection,
    featured_products_fetcher,
    my_ads_fetcher,
    my_posts_fetcher,
)

__all__ = [
    "PageFetcher",
    "PagedCollection",
    "ListKind",
    "build_collection",
    "featured_products_fetcher",
    "my_ads_fetcher",
    "my_posts_fetcher",
]
