"""Product lookup contract, an in-memory catalog, and scan resolution."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

import structlog

from .errors import LookupMissError, ScanUnavailableError, errmsg
from .models import Product

logger = structlog.get_logger()


class ProductLookup(Protocol):
    def find_by_code_or_barcode(self, text: str) -> Optional[Product]: ...

    def search(self, query: str) -> Sequence[Product]: ...


class InMemoryCatalog:
    """Product lookup over a fixed list, in catalog order."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: dict[str, Product] = {p.id: p for p in products}

    def add(self, product: Product) -> None:
        self._products[product.id] = product

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def find_by_code_or_barcode(self, text: str) -> Optional[Product]:
        """Exact match on barcode or short code; barcode wins on ties."""
        needle = (text or "").strip()
        if not needle:
            return None
        for product in self._products.values():
            if product.barcode == needle:
                return product
        for product in self._products.values():
            if product.code == needle:
                return product
        return None

    def search(self, query: str) -> list[Product]:
        """Case-insensitive substring match over name, code and barcode."""
        needle = (query or "").strip().lower()
        if not needle:
            return []
        return [
            p
            for p in self._products.values()
            if needle in p.name.lower()
            or (p.code is not None and needle in p.code.lower())
            or (p.barcode is not None and needle in p.barcode.lower())
        ]

    def __len__(self) -> int:
        return len(self._products)


def lookup_scan(catalog: ProductLookup, text: str) -> Product:
    """Resolve scanned text to a product or raise LookupMissError."""
    product = catalog.find_by_code_or_barcode(text)
    if product is None:
        logger.info("lookup_miss", code=text)
        raise LookupMissError(text)
    return product


class ScanStatus(Enum):
    CONTENT = "content"
    NOT_GRANTED = "not_granted"
    UNSUPPORTED = "unsupported"
    CANCELLED = "cancelled"


_SCAN_MESSAGES = {
    ScanStatus.NOT_GRANTED: errmsg.SCAN_NOT_GRANTED,
    ScanStatus.UNSUPPORTED: errmsg.SCAN_UNSUPPORTED,
    ScanStatus.CANCELLED: errmsg.SCAN_CANCELLED,
}


@dataclass(frozen=True)
class ScanResult:
    """One scanner event: decoded text, or why there is none."""

    status: ScanStatus
    content: str = ""

    @classmethod
    def of(cls, content: str) -> "ScanResult":
        return cls(status=ScanStatus.CONTENT, content=content)

    def has_content(self) -> bool:
        return self.status is ScanStatus.CONTENT and bool(self.content)


def resolve_scan(catalog: ProductLookup, result: ScanResult) -> Product:
    """Feed a scan event's text into the catalog.

    Raises ScanUnavailableError when the scanner produced nothing and
    LookupMissError when the text matches no product.
    """
    if not result.has_content():
        status = result.status if result.status is not ScanStatus.CONTENT else ScanStatus.CANCELLED
        raise ScanUnavailableError(status.value, _SCAN_MESSAGES[status])
    return lookup_scan(catalog, result.content)
