"""Test doubles and builders shared across settlement tests."""

from typing import Optional

from pos_settlement.errors import RenderError
from pos_settlement.models import Product


def make_product(
    product_id: str = "prod-1",
    name: str = "Beras 5kg",
    sell_price: int = 10000,
    cost_price: int = 6000,
    code: Optional[str] = None,
    barcode: Optional[str] = None,
    stock: int = 10,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        sell_price=sell_price,
        cost_price=cost_price,
        code=code,
        barcode=barcode,
        stock=stock,
    )


class RecordingRenderer:
    """Renderer double that records payloads and returns fake PNG bytes."""

    def __init__(self, fail_on: tuple[str, ...] = ()):
        self.calls: list[str] = []
        self.fail_on = fail_on

    def render(self, payload: str, size_hint: int = 200) -> bytes:
        self.calls.append(payload)
        if payload in self.fail_on:
            raise RenderError("renderer down")
        return b"PNG:" + payload.encode()


class RecordingStore:
    """Transaction store double; optionally fails the first ``failures`` appends."""

    def __init__(self, failures: int = 0, reject: bool = False):
        self.transactions = []
        self.failures = failures
        self.reject = reject
        self.attempts = 0

    def append(self, transaction) -> bool:
        self.attempts += 1
        if self.failures > 0:
            self.failures -= 1
            raise ConnectionError("datastore unreachable")
        if self.reject:
            return False
        self.transactions.append(transaction)
        return True

    def ids(self) -> list[str]:
        return [t.id for t in self.transactions]
