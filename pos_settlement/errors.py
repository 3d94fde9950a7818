"""Error types for the settlement engine."""

from typing import Optional


class errmsg:
    """Error message constants for the settlement engine."""

    QUANTITY_POSITIVE = "Quantity must be positive"
    PRICE_NON_NEGATIVE = "Effective price cannot be negative"
    DISCOUNT_NON_NEGATIVE = "Discount cannot be negative"
    LEDGER_EMPTY = "Add at least one product before finalizing"
    CHANNEL_UNKNOWN = "Unknown payment channel"
    CHANNEL_NOT_CONFIGURED = "Payment channel is not configured for this store"
    PRODUCT_NOT_FOUND = "Product not found"
    SCAN_NOT_GRANTED = "Camera permission is required to scan barcodes"
    SCAN_UNSUPPORTED = "Barcode scanning is not supported on this platform"
    SCAN_CANCELLED = "Scan cancelled"
    PERSIST_REJECTED = "Persistence rejected the transaction"
    INVOICE_ID_MALFORMED = "Malformed invoice id"
    PREFIX_INVALID = "Invoice prefix must be letters and digits only"
    PREFIXES_EQUAL = "Standard and quick invoice prefixes must differ"


class SettlementError(Exception):
    """Base class for settlement engine errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class InvalidQuantityError(SettlementError):
    """Non-positive quantity supplied when adding a line item."""


class InvalidPriceError(SettlementError):
    """Negative effective price supplied for a line item."""


class InvalidDiscountError(SettlementError):
    """Negative discount supplied for a session."""


class EmptyLedgerError(SettlementError):
    """Finalize was attempted with no line items."""


class ChannelUnavailableError(SettlementError):
    """Selected payment channel is unknown or missing its store fields."""

    def __init__(self, channel: str, message: str = errmsg.CHANNEL_NOT_CONFIGURED):
        super().__init__(f"{message}: {channel}")
        self.channel = channel


class RenderError(SettlementError):
    """QR image rendering failed. Callers fall back to text-only display."""


class PersistenceFailure(SettlementError):
    """Appending a transaction to the store failed. The ledger is retained."""

    def __init__(self, invoice_id: str, cause: Optional[Exception] = None):
        super().__init__(f"failed to persist {invoice_id}", cause)
        self.invoice_id = invoice_id


class LookupMissError(SettlementError):
    """Scanned or searched code matched no product."""

    def __init__(self, code: str):
        super().__init__(f"{errmsg.PRODUCT_NOT_FOUND}: {code}")
        self.code = code


class ScanUnavailableError(SettlementError):
    """Scanner delivered no content (permission, platform, or cancel)."""

    def __init__(self, status: str, message: str):
        super().__init__(message)
        self.status = status


class InvalidInvoiceIdError(SettlementError):
    """Invoice id does not follow the <prefix>-<counter><ddmmyy> layout."""

    def __init__(self, invoice_id: str):
        super().__init__(f"{errmsg.INVOICE_ID_MALFORMED}: {invoice_id!r}")
        self.invoice_id = invoice_id


class InvalidSettingError(SettlementError):
    """A configuration value the engine cannot run with."""

    def __init__(self, name: str, value: str, message: str):
        super().__init__(f"{message}: {name}={value!r}")
        self.name = name
        self.value = value
