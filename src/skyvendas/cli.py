"""
Command-line presenter for the SkyVendas paged lists.
"""

import argparse
import asyncio
import json
import sys

from skyvendas.clients.api_client import SkyVendasAPIClient
from skyvendas.config import Config
from skyvendas.models.collection import CollectionState
from skyvendas.models.listings import Ad, ListingModel, Post, Product
from skyvendas.services.collection import PagedCollection
from skyvendas.services.fetchers import ListKind, build_collection
from skyvendas.utils.errors import SkyVendasError, handle_error
from skyvendas.utils.logging_config import initialize_logging


def format_item(item: ListingModel) -> str:
    """One-line rendering of a list item."""
    if isinstance(item, Product):
        seller = item.user.username if item.user and item.user.username else "-"
        return f"[{item.id}] {item.title} - {item.price:.2f} MT (@{seller})"
    if isinstance(item, Ad):
        days = f"{item.days_left}d left" if item.days_left is not None else "no expiry"
        return f"[{item.id}] {item.title or item.product.name or '-'} ({days})"
    if isinstance(item, Post):
        content = item.content if len(item.content) <= 60 else item.content[:57] + "..."
        return f"[{item.id}] {content} ({item.likes} likes)"
    return f"[{item.id}]"


def format_status(state: CollectionState) -> str:
    if state.has_more:
        return f"{len(state.items)} item(s), more available"
    reason = state.exhausted_by.value if state.exhausted_by else "done"
    return f"{len(state.items)} item(s), end of list ({reason})"


async def run_list(
    collection: PagedCollection,
    pages: int = 1,
    sample_size: int | None = None,
    as_json: bool = False,
    search: str | None = None,
) -> int:
    """
    Load up to `pages` pages into the collection and print them.

    `search` keeps only the ads whose title or product name matches.
    """
    await collection.load_first_page()
    loaded = 1
    while loaded < pages and collection.has_more and collection.last_error is None:
        await collection.load_next_page()
        loaded += 1

    state = collection.state
    if state.last_error is not None:
        error = state.last_error.exception
        if isinstance(error, Exception):
            message = handle_error(error, f"load {collection.name}")
        else:
            message = f"Error: {state.last_error.message}"
        print(message, file=sys.stderr)
        if not state.items:
            return 1

    shown = collection.sample(sample_size) if sample_size is not None else state.items
    if search is not None:
        shown = [item for item in shown if isinstance(item, Ad) and item.matches(search)]

    if as_json:
        payload = {
            "state": state.to_dict(),
            "items": [item.model_dump(mode="json") for item in shown],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        for item in shown:
            print(format_item(item))
        if search is not None:
            print(f"{len(shown)} match(es) for '{search.strip()}'")
        print(format_status(state))

    return 0 if state.last_error is None else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Browse SkyVendas lists")
    parser.add_argument(
        "list",
        choices=[kind.value for kind in ListKind],
        help="Which list to load",
    )
    parser.add_argument(
        "--pages", type=int, default=1, help="Number of pages to load (default: 1)"
    )
    parser.add_argument(
        "--sample", type=int, default=None, help="Show a random sample of N items"
    )
    parser.add_argument(
        "--token", default=None, help="API token (default: SKYVENDAS_API_TOKEN)"
    )
    parser.add_argument(
        "--search", default=None, help="Filter ads by title or product name"
    )
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument(
        "--no-log-file", action="store_true", help="Log to the console only"
    )
    args = parser.parse_args(argv)

    if args.pages < 1:
        parser.error("--pages must be >= 1")
    if args.sample is not None and args.sample < 0:
        parser.error("--sample must be >= 0")
    if args.search is not None and args.list != ListKind.ADS:
        parser.error("--search only applies to the ads list")

    try:
        config = Config.load()
    except SkyVendasError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    initialize_logging(file=not args.no_log_file)

    token = args.token or config.api_token
    if args.list != ListKind.PRODUCTS and not token:
        print(
            "Error: this list requires a signed-in user. "
            "Pass --token or set SKYVENDAS_API_TOKEN.",
            file=sys.stderr,
        )
        return 2

    async def _run() -> int:
        async with SkyVendasAPIClient(
            base_url=config.api_base_url,
            token=token,
            timeout=config.request_timeout,
        ) as client:
            collection = build_collection(args.list, client, config)
            try:
                return await run_list(
                    collection,
                    pages=args.pages,
                    sample_size=args.sample,
                    as_json=args.json,
                    search=args.search,
                )
            finally:
                collection.close()

    return asyncio.run(_run())


if __name__ == "__main__":
    sys.exit(main())
