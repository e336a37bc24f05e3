"""Fetch-or-derive loading of an item's option data."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from menu_cards.config import FETCH_TIMEOUT_SECONDS, MENU_BASE_URL
from menu_cards.decoding import (
    base_price_from_payload,
    decode_item_options,
    options_from_attributes,
    parse_price_text,
    synthesize_price_table,
)
from menu_cards.models import ItemOptions, MenuCard, PriceEntry

logger = logging.getLogger(__name__)


def _priced(prices: tuple[PriceEntry, ...]) -> tuple[PriceEntry, ...]:
    return prices if any(entry.price > 0 for entry in prices) else ()


def build_item_options(card: MenuCard, payload: Any) -> ItemOptions:
    """
    Merge fetched JSON with what the card rendered, field by field.

    Fetched values win. Missing fields fall back to the card's markup
    attributes. A price table with no positive entry counts as missing, and
    when neither source has a usable one it is synthesized from a flat base
    price (the JSON ``price`` field, else the card's price text).
    """
    fetched = decode_item_options(payload)
    rendered = options_from_attributes(card.attributes, card.sizes, card.flavours)

    sizes = fetched.sizes or rendered.sizes
    flavours = fetched.flavours or rendered.flavours
    prices = _priced(fetched.prices) or _priced(rendered.prices)
    if not prices:
        base_price = base_price_from_payload(payload) or parse_price_text(card.price_text)
        prices = synthesize_price_table(sizes, flavours, base_price) or fetched.prices or rendered.prices

    return ItemOptions(
        sizes=sizes,
        flavours=flavours,
        prices=prices,
        side_categories=fetched.side_categories or rendered.side_categories,
        additions=fetched.additions or rendered.additions,
        images=fetched.images or rendered.images,
        content=fetched.content or card.description,
    )


class OptionLoader:
    """Loads item JSON over HTTP, falling back to the card's own markup."""

    def __init__(
        self,
        base_url: str = MENU_BASE_URL,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def candidate_urls(self, item_url: str) -> list[str]:
        """JSON locations to try for an item, in order."""
        absolute = self._absolute_url(item_url)
        if absolute is None:
            return []
        stem = absolute.rstrip("/")
        return [f"{stem}/index.json", f"{stem}.json"]

    def _absolute_url(self, item_url: str) -> str | None:
        if not item_url:
            return None
        if item_url.startswith(("http://", "https://")):
            return item_url
        if not self.base_url:
            return None
        return f"{self.base_url}/{item_url.lstrip('/')}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def fetch_item_json(self, item_url: str) -> dict | None:
        candidates = self.candidate_urls(item_url)
        if not candidates:
            logger.debug("fetch_skipped url=%r reason=no_base_url", item_url)
            return None

        client = self._get_client()
        for url in candidates:
            try:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPError as exc:
                logger.debug("fetch_failed url=%r error=%r", url, exc)
                continue
            except ValueError as exc:
                logger.debug("fetch_bad_json url=%r error=%r", url, exc)
                continue

            if isinstance(payload, dict):
                return payload
            logger.debug("fetch_not_object url=%r type=%s", url, type(payload).__name__)
        return None

    async def load(self, card: MenuCard) -> ItemOptions:
        payload = await self.fetch_item_json(card.url)
        return build_item_options(card, payload)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
