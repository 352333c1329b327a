import logging
import re
import uuid
from typing import Callable, List, Union
from uuid import UUID

from price_registry.config import MAX_PRICE
from price_registry.store import PriceTable

logger = logging.getLogger("price_registry.services")

IdFactory = Callable[[], UUID]

_HYPHENATED = (
    "[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
# hyphenated, simple, braced and urn layouts; ASCII hex only
_PRICE_ID_RE = re.compile(
    "(?:"
    + "|".join(
        [
            _HYPHENATED,
            "[0-9a-fA-F]{32}",
            r"\{" + _HYPHENATED + r"\}",
            "urn:uuid:" + _HYPHENATED,
        ]
    )
    + ")"
)


class PriceRegistryError(Exception):
    """Base class for errors surfaced to clients."""


class BadRequest(PriceRegistryError):
    pass


class PriceNotFound(PriceRegistryError):
    def __init__(self, price_id: UUID):
        super().__init__(f"Price {price_id} not found")
        self.price_id = price_id


def parse_price_id(raw: Union[str, UUID]) -> UUID:
    if isinstance(raw, UUID):
        return raw
    # UUID() alone is too lenient: it strips braces and urn prefixes anywhere,
    # drops stray hyphens and accepts non-ASCII digits
    if not isinstance(raw, str) or not _PRICE_ID_RE.fullmatch(raw):
        raise BadRequest(f"Invalid price id '{raw}'")
    return UUID(raw)


def _check_price(price) -> int:
    # bool is an int subclass; JSON true is not a price
    if isinstance(price, bool) or not isinstance(price, int):
        raise BadRequest(f"Price must be an integer, got {price!r}")
    if not 0 <= price <= MAX_PRICE:
        raise BadRequest(f"Price out of range: {price}")
    return price


class PriceService:
    """
    The five registry operations, independent of HTTP.

    ``id_factory`` mints identifiers for new records; it defaults to
    ``uuid.uuid4`` and can be swapped for deterministic values in tests.
    """

    def __init__(self, table: PriceTable, id_factory: IdFactory = uuid.uuid4):
        self.table = table
        self.id_factory = id_factory

    async def list_prices(self) -> List[int]:
        prices = await self.table.values()
        logger.debug(f"Listed {len(prices)} prices")
        return prices

    async def create_price(self, price: int) -> UUID:
        price = _check_price(price)
        price_id = self.id_factory()
        await self.table.insert(price_id, price)
        logger.info(f"Created price {price_id}: {price}")
        return price_id

    async def get_price(self, price_id: Union[str, UUID]) -> int:
        key = parse_price_id(price_id)
        price = await self.table.get(key)
        if price is None:
            raise PriceNotFound(key)
        logger.debug(f"Price hit for {key}: {price}")
        return price

    async def update_price(self, price_id: Union[str, UUID], price: int) -> None:
        key = parse_price_id(price_id)
        price = _check_price(price)
        if not await self.table.replace(key, price):
            raise PriceNotFound(key)
        logger.info(f"Updated price {key}: {price}")

    async def delete_price(self, price_id: Union[str, UUID]) -> None:
        key = parse_price_id(price_id)
        if not await self.table.remove(key):
            raise PriceNotFound(key)
        logger.info(f"Deleted price {key}")
