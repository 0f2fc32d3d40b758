import asyncio
from dataclasses import dataclass

import pytest

from skyvendas.services.collection import PagedCollection


@dataclass(frozen=True)
class Item:
    id: int
    label: str = ""


def make_items(first: int, last: int) -> list[Item]:
    """Items with ids first..last inclusive."""
    return [Item(id=i, label=f"item-{i}") for i in range(first, last + 1)]


class ScriptedFetcher:
    """Page fetcher returning scripted pages and recording every call."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.calls: list[int] = []

    async def __call__(self, page_number: int):
        self.calls.append(page_number)
        result = self.pages.get(page_number, [])
        if isinstance(result, Exception):
            raise result
        return result


class GatedFetcher:
    """Page fetcher whose calls block until released by the test."""

    def __init__(self):
        self.calls: list[int] = []
        self._pending: list[asyncio.Future] = []

    async def __call__(self, page_number: int):
        self.calls.append(page_number)
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def resolve(self, index: int, result) -> None:
        self._pending[index].set_result(result)

    def reject(self, index: int, error: Exception) -> None:
        self._pending[index].set_exception(error)


@pytest.fixture
def scripted_fetcher():
    """Fixture for a fetcher with ten-item pages 1 and 2 and a short page 3."""
    return ScriptedFetcher(
        {
            1: make_items(1, 10),
            2: make_items(11, 20),
            3: make_items(21, 25),
        }
    )


@pytest.fixture
def gated_fetcher():
    return GatedFetcher()


@pytest.fixture
def collection(scripted_fetcher):
    """PagedCollection over the scripted fetcher with page size 10."""
    return PagedCollection(scripted_fetcher, page_size=10, name="test")
