"""Tests for the command-line presenter."""

import json
from unittest.mock import patch

import pytest

from skyvendas import cli
from skyvendas.cli import format_item, format_status, main, run_list
from skyvendas.models.listings import Ad, AdProduct, Post, Product
from skyvendas.models.pagination import PageResult
from skyvendas.services.collection import PagedCollection
from skyvendas.utils.errors import TransientFetchError
from tests.conftest import ScriptedFetcher


def products(first, last):
    return [
        Product(id=i, title=f"Produto {i}", price=float(i), slug=f"p-{i}")
        for i in range(first, last + 1)
    ]


def test_format_item_variants():
    assert format_item(Product(id=1, title="Mesa", price=900)) == "[1] Mesa - 900.00 MT (@-)"
    assert format_item(Ad(id=2, title="Promo", days_left=3)) == "[2] Promo (3d left)"
    assert format_item(Post(id=3, content="x" * 80, likes=2)).endswith("... (2 likes)")


@pytest.mark.asyncio
async def test_run_list_loads_requested_pages(capsys):
    fetcher = ScriptedFetcher({1: products(1, 5), 2: products(6, 10), 3: products(11, 12)})
    collection = PagedCollection(fetcher, page_size=5, name="products")

    code = await run_list(collection, pages=2)

    out = capsys.readouterr().out
    assert code == 0
    assert fetcher.calls == [1, 2]
    assert "[10] Produto 10" in out
    assert "10 item(s), more available" in out


@pytest.mark.asyncio
async def test_run_list_stops_when_exhausted(capsys):
    fetcher = ScriptedFetcher({1: products(1, 3)})
    collection = PagedCollection(fetcher, page_size=5, name="products")

    await run_list(collection, pages=4)

    assert fetcher.calls == [1]
    assert "end of list (short_page)" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_list_json_sample(capsys):
    fetcher = ScriptedFetcher({1: products(1, 5)})
    collection = PagedCollection(fetcher, page_size=5, name="products")

    await run_list(collection, sample_size=2, as_json=True)

    payload = json.loads(capsys.readouterr().out)
    assert len(payload["items"]) == 2
    assert payload["state"]["count"] == 5


@pytest.mark.asyncio
async def test_run_list_reports_error(capsys):
    fetcher = ScriptedFetcher({1: TransientFetchError("Request timed out")})
    collection = PagedCollection(fetcher, page_size=5, name="products")

    code = await run_list(collection)

    assert code == 1
    assert "Request timed out" in capsys.readouterr().err


def test_format_status_initial():
    collection = PagedCollection(ScriptedFetcher(), page_size=5)
    assert format_status(collection.state) == "0 item(s), more available"


def test_main_requires_token_for_private_lists(capsys, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SKYVENDAS_API_TOKEN", raising=False)

    with patch.object(cli, "initialize_logging"):
        code = main(["posts"])

    assert code == 2
    assert "requires a signed-in user" in capsys.readouterr().err


def test_main_rejects_bad_pages():
    with pytest.raises(SystemExit):
        main(["products", "--pages", "0"])


@pytest.mark.asyncio
async def test_run_list_filters_ads_by_search(capsys):
    ads = [
        Ad(id=1, title="Promo Verão", days_left=2),
        Ad(id=2, title="Destaque", product=AdProduct(name="Bicicleta")),
        Ad(id=3, title="Carro usado"),
    ]
    fetcher = ScriptedFetcher({1: PageResult(items=ads, has_more=False)})
    collection = PagedCollection(fetcher, page_size=100, name="ads")

    code = await run_list(collection, search="bici")

    out = capsys.readouterr().out
    assert code == 0
    assert "[2] Destaque" in out
    assert "[1]" not in out
    assert "1 match(es) for 'bici'" in out


def test_main_rejects_search_outside_ads():
    with pytest.raises(SystemExit):
        main(["products", "--search", "mesa"])
