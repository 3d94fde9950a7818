"""Data models for the cart-to-settlement engine.

Monetary amounts are plain ints in the smallest currency unit (Rupiah has
no minor unit), so sums stay exact across any number of additions.
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional


class EWalletProvider(Enum):
    """Supported e-wallet providers. Values double as store field stems."""

    GOPAY = "gopay"
    OVO = "ovo"
    DANA = "dana"
    SHOPEEPAY = "shopeepay"

    @property
    def channel(self) -> str:
        """Channel tag for this provider, e.g. ``ewallet-dana``."""
        return f"ewallet-{self.value}"

    @property
    def config_field(self) -> str:
        """Name of the StorePaymentConfig field holding the phone number."""
        return f"{self.value}_number"


@dataclass(frozen=True)
class Product:
    """A catalog product. The engine only ever reads it."""

    id: str
    name: str
    sell_price: int
    cost_price: int
    code: Optional[str] = None
    barcode: Optional[str] = None
    stock: int = 0


@dataclass(frozen=True)
class LineItem:
    """One product in the ledger with its quantity and charged unit price.

    Lines are immutable. The ledger stores a new line on every change, so a
    line kept on a Transaction keeps the figures it was finalized with.
    """

    product: Product
    quantity: int
    effective_price: int

    @property
    def line_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> int:
        return self.effective_price * self.quantity

    def with_quantity(self, quantity: int) -> "LineItem":
        return replace(self, quantity=quantity)


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _has_digits(value: Optional[str]) -> bool:
    return bool(value) and any(c.isdecimal() for c in value)


@dataclass(frozen=True)
class StorePaymentConfig:
    """Snapshot of the payment fields from the store settings.

    A channel is available only when every field it needs is present.
    Blank strings count as absent, and so do phone numbers without digits.
    """

    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_account_holder: Optional[str] = None
    gopay_number: Optional[str] = None
    ovo_number: Optional[str] = None
    dana_number: Optional[str] = None
    shopeepay_number: Optional[str] = None
    # Legacy single e-wallet field; enables the QRIS channel.
    ewallet_number: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "StorePaymentConfig":
        """Build from a store record, ignoring unrelated keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known and v is not None})

    def has_bank_transfer(self) -> bool:
        return all(
            _present(v)
            for v in (self.bank_name, self.bank_account_number, self.bank_account_holder)
        )

    def phone_for(self, provider: EWalletProvider) -> Optional[str]:
        value = getattr(self, provider.config_field)
        return value if _has_digits(value) else None

    def has_ewallet(self, provider: EWalletProvider) -> bool:
        return self.phone_for(provider) is not None

    def ewallet_providers(self) -> tuple[EWalletProvider, ...]:
        """Providers with a phone number configured, in enum order."""
        return tuple(p for p in EWalletProvider if self.has_ewallet(p))

    def has_legacy_qris(self) -> bool:
        return _present(self.ewallet_number)


@dataclass(frozen=True)
class PaymentPayload:
    """Encoded payload for one channel and its rendered QR image, if any."""

    channel: str
    payload: str
    image: Optional[bytes] = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.channel, self.payload)

    def has_image(self) -> bool:
        return self.image is not None


@dataclass(frozen=True)
class Transaction:
    """A finalized invoice. Never mutated after creation."""

    id: str
    items: tuple[LineItem, ...]
    subtotal: int
    discount: int
    total: int
    profit: int
    payment_method: str
    created_at: datetime
    is_manual: bool = False
    payment_payload: str = ""

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
