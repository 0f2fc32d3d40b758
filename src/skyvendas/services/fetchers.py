"""
Page fetchers for the SkyVendas lists.

Each factory returns an async `fetch_page(page_number)` closure with its
page size baked in, mapping the raw payload to typed items before the
collection sees it.
"""

from collections.abc import Sequence
from enum import StrEnum
import logging
from typing import Any

from skyvendas.clients.api_client import SkyVendasAPIClient
from skyvendas.config import Config
from skyvendas.models.listings import Ad, Post, Product
from skyvendas.models.pagination import PageRequest, PageResult
from skyvendas.services.collection import PageFetcher, PagedCollection

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/produtos/"
MY_POSTS_PATH = "/publicacoes/minhas"
MY_ADS_PATH = "/produtos/anuncios/tipo"


class ListKind(StrEnum):
    """The paged lists the client knows how to fetch."""

    PRODUCTS = "products"
    POSTS = "posts"
    ADS = "ads"


def featured_products_fetcher(
    client: SkyVendasAPIClient, page_size: int = 10
) -> PageFetcher:
    """Featured products grid: offset/limit paging over /produtos/."""

    async def fetch_page(page_number: int) -> Sequence[Product]:
        request = PageRequest(page=page_number, page_size=page_size)
        data = await client.get_json(
            PRODUCTS_PATH, params={"limit": request.limit, "offset": request.offset}
        )
        if not isinstance(data, list):
            logger.debug(f"Products page {page_number}: non-list body, treating as empty")
            return []
        return Product.from_api_list(data)

    return fetch_page


def my_posts_fetcher(client: SkyVendasAPIClient, per_page: int = 20) -> PageFetcher:
    """The user's posts: page/per_page paging with a total_pages envelope."""

    async def fetch_page(page_number: int) -> PageResult[Post]:
        data = await client.get_json(
            MY_POSTS_PATH, params={"page": page_number, "per_page": per_page}
        )
        envelope: dict[str, Any] = data if isinstance(data, dict) else {}
        records = envelope.get("publicacoes")
        try:
            total_pages = int(envelope.get("total_pages") or 1)
        except (TypeError, ValueError):
            total_pages = 1

        return PageResult(
            items=Post.from_api_list(records if isinstance(records, list) else []),
            total_pages=total_pages,
            page=page_number,
        )

    return fetch_page


def my_ads_fetcher(client: SkyVendasAPIClient, limit: int = 100) -> PageFetcher:
    """The user's ads: a single request, signaled as the only page."""

    async def fetch_page(page_number: int) -> PageResult[Ad]:
        if page_number > 1:
            return PageResult(items=(), has_more=False)

        data = await client.get_json(MY_ADS_PATH, params={"limit": limit})
        return PageResult(
            items=Ad.from_api_list(data if isinstance(data, list) else []),
            has_more=False,
        )

    return fetch_page


def build_collection(
    kind: ListKind | str, client: SkyVendasAPIClient, config: Config
) -> PagedCollection:
    """Wire the fetcher and page size for a list kind into a collection."""
    kind = ListKind(kind)

    if kind is ListKind.PRODUCTS:
        page_size = config.products_page_size
        fetcher = featured_products_fetcher(client, page_size)
    elif kind is ListKind.POSTS:
        page_size = config.posts_page_size
        fetcher = my_posts_fetcher(client, page_size)
    else:
        page_size = config.ads_limit
        fetcher = my_ads_fetcher(client, page_size)

    return PagedCollection(fetcher, page_size=page_size, name=kind.value)
