"""
Item models for the three paged lists.

Each model maps the loosely-shaped API payload of its endpoint once,
right after the fetch, so the collection only ever sees typed items.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_number(value: Any, default: float = 0) -> float:
    """Finite float of `value`, or `default` when it is missing or not a number."""
    try:
        number = float(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


class ListingModel(BaseModel):
    """Base class for list items; `id` is the identity used for dedup."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ListingModel:
        raise NotImplementedError

    @classmethod
    def from_api_list(cls, records: Iterable[Any]) -> list[ListingModel]:
        """Map a list of payloads, dropping records without an id."""
        items = []
        for record in records:
            if not isinstance(record, dict):
                logger.warning(f"Skipping malformed {cls.__name__} record: {record!r}")
                continue
            try:
                items.append(cls.from_api(record))
            except (ValueError, OverflowError) as e:
                logger.warning(f"Skipping {cls.__name__} record: {e}")
        return items


class UserSummary(BaseModel):
    """Author or seller shown on a card."""

    model_config = ConfigDict(frozen=True)

    id: int | str | None = None
    username: str | None = None
    name: str | None = None
    avatar: str | None = None


class Product(ListingModel):
    """Product card in the featured products grid."""

    title: str = ""
    price: float = 0
    slug: str = ""
    thumb: str | None = None
    state: str | None = None
    comments: int = 0
    views: int = 0
    likes: int = 0
    liked: bool = False
    user: UserSummary | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Product:
        if data.get("id") is None:
            raise ValueError("product without id")

        user = data.get("user")
        return cls(
            id=data["id"],
            title=data.get("title") or data.get("nome") or "",
            price=_as_number(data.get("price", data.get("preco"))),
            slug=str(data.get("slug") or ""),
            thumb=data.get("thumb") or data.get("imagem"),
            state=data.get("state"),
            comments=int(_as_number(data.get("comments"))),
            views=int(_as_number(data.get("views"))),
            likes=int(_as_number(data.get("likes"))),
            liked=bool(data.get("liked")),
            user=UserSummary(
                username=user.get("username"),
                name=user.get("name"),
                avatar=user.get("avatar"),
            )
            if isinstance(user, dict)
            else None,
        )


class AdProduct(BaseModel):
    """Product promoted by an ad."""

    model_config = ConfigDict(frozen=True)

    id: int | str | None = None
    name: str | None = None
    price: float | None = None
    slug: str | None = None
    cover: str | None = None


class Ad(ListingModel):
    """Entry of the user's ads list."""

    title: str | None = None
    description: str | None = None
    ad_type: str | None = None
    product: AdProduct = Field(default_factory=AdProduct)
    expires_at: str | None = None
    days_left: int | None = None
    promoted_at: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Ad:
        ad = _as_dict(data.get("anuncio"))
        product = _as_dict(data.get("produto"))
        if ad.get("id") is None:
            raise ValueError("ad without id")

        price = product.get("preco")
        return cls(
            id=ad["id"],
            title=ad.get("titulo"),
            description=ad.get("descricao"),
            ad_type=ad.get("tipo_anuncio"),
            product=AdProduct(
                id=product.get("id"),
                name=product.get("nome"),
                price=_as_number(price) if price is not None else None,
                slug=product.get("slug"),
                cover=product.get("capa"),
            ),
            expires_at=ad.get("expira_em"),
            days_left=ad.get("dias_restantes"),
            promoted_at=ad.get("promovido_em"),
        )

    def matches(self, query: str) -> bool:
        """Case-insensitive match on the ad title or product name."""
        needle = query.strip().lower()
        if not needle:
            return True
        return needle in (self.title or "").lower() or needle in (
            self.product.name or ""
        ).lower()


class Post(ListingModel):
    """Entry of the user's posts list."""

    content: str = ""
    gradient_style: str = "default"
    time: str = ""
    likes: int = 0
    liked: bool = False
    user: UserSummary = Field(default_factory=UserSummary)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Post:
        if data.get("id") is None:
            raise ValueError("post without id")

        author = _as_dict(data.get("usuario"))
        liked = data.get("liked")
        return cls(
            id=data["id"],
            content=data.get("conteudo") or "",
            gradient_style=data.get("gradient_style") or "default",
            time=data.get("tempo") or data.get("data_criacao") or "",
            likes=int(_as_number(data.get("likes_count"))),
            liked=liked if isinstance(liked, bool) else False,
            user=UserSummary(
                id=author.get("id"),
                name=author.get("nome") or author.get("username"),
                username=author.get("username"),
                avatar=author.get("foto_perfil"),
            ),
        )
