"""Cart-to-settlement engine for a retail point of sale."""

from .errors import (
    SettlementError,
    InvalidQuantityError,
    InvalidPriceError,
    InvalidDiscountError,
    EmptyLedgerError,
    ChannelUnavailableError,
    RenderError,
    PersistenceFailure,
    LookupMissError,
    ScanUnavailableError,
    InvalidInvoiceIdError,
    InvalidSettingError,
)
from .models import (
    EWalletProvider,
    Product,
    LineItem,
    StorePaymentConfig,
    PaymentPayload,
    Transaction,
)
from .ledger import LineItemLedger
from .pricing import PriceSummary, subtotal, total, profit, summarize
from .identifiers import (
    QUICK_PREFIX,
    STANDARD_PREFIX,
    InvoiceIdentifierGenerator,
    InvoiceSequence,
    count_based_invoice_id,
    format_invoice_id,
    parse_invoice_id,
)
from .payloads import (
    CASH,
    TRANSFER,
    QRIS,
    normalize_phone,
    encode_bank_transfer,
    encode_ewallet_deep_link,
    encode_qris_legacy,
    encode_channel_payload,
)
from .rendering import QrRenderer, QRCodeRenderer
from .payload_cache import PayloadCache
from .channels import PaymentChannelResolver, available_channels, is_available
from .catalog import (
    ProductLookup,
    InMemoryCatalog,
    ScanResult,
    ScanStatus,
    lookup_scan,
    resolve_scan,
)
from .checkout import CheckoutSession, TransactionStore
from .receipt import format_receipt, format_rupiah
from .settings import Settings, configure_logging

__all__ = [
    # Errors
    "SettlementError",
    "InvalidQuantityError",
    "InvalidPriceError",
    "InvalidDiscountError",
    "EmptyLedgerError",
    "ChannelUnavailableError",
    "RenderError",
    "PersistenceFailure",
    "LookupMissError",
    "ScanUnavailableError",
    "InvalidInvoiceIdError",
    "InvalidSettingError",
    # Models
    "EWalletProvider",
    "Product",
    "LineItem",
    "StorePaymentConfig",
    "PaymentPayload",
    "Transaction",
    # Ledger and pricing
    "LineItemLedger",
    "PriceSummary",
    "subtotal",
    "total",
    "profit",
    "summarize",
    # Identifiers
    "QUICK_PREFIX",
    "STANDARD_PREFIX",
    "InvoiceIdentifierGenerator",
    "InvoiceSequence",
    "count_based_invoice_id",
    "format_invoice_id",
    "parse_invoice_id",
    # Payloads
    "CASH",
    "TRANSFER",
    "QRIS",
    "normalize_phone",
    "encode_bank_transfer",
    "encode_ewallet_deep_link",
    "encode_qris_legacy",
    "encode_channel_payload",
    # Rendering and channels
    "QrRenderer",
    "QRCodeRenderer",
    "PayloadCache",
    "PaymentChannelResolver",
    "available_channels",
    "is_available",
    # Catalog
    "ProductLookup",
    "InMemoryCatalog",
    "ScanResult",
    "ScanStatus",
    "lookup_scan",
    "resolve_scan",
    # Checkout
    "CheckoutSession",
    "TransactionStore",
    "format_receipt",
    "format_rupiah",
    # Settings
    "Settings",
    "configure_logging",
]
