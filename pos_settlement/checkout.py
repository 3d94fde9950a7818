"""Invoice session: ledger, discount and payment channel up to a finalized Transaction."""

import uuid
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Optional, Protocol, Union

import structlog

from . import pricing
from .catalog import ProductLookup, ScanResult, lookup_scan, resolve_scan
from .channels import PaymentChannelResolver
from .errors import PersistenceFailure, errmsg
from .identifiers import InvoiceIdentifierGenerator
from .ledger import LineItemLedger
from .models import LineItem, PaymentPayload, Product, StorePaymentConfig, Transaction
from .payload_cache import PayloadCache
from .settings import Settings
from .validation import require_non_negative_discount, require_not_empty

logger = structlog.get_logger()


class TransactionStore(Protocol):
    """Persistence collaborator. Returning normally (or True) acknowledges."""

    def append(self, transaction: Transaction) -> Optional[bool]: ...


class CheckoutSession:
    """One invoice being built at the counter.

    The ledger is only cleared after the store acknowledges the
    transaction, so a failed save can be retried without re-entering items.
    """

    def __init__(
        self,
        config: StorePaymentConfig,
        *,
        is_manual: bool = False,
        generator: Optional[InvoiceIdentifierGenerator] = None,
        cache: Optional[PayloadCache] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        settings = settings or Settings()
        self.is_manual = is_manual
        self.prefix = settings.quick_invoice_prefix if is_manual else settings.invoice_prefix
        self.ledger = LineItemLedger()
        self.channels = PaymentChannelResolver(config, cache)
        self._generator = generator or InvoiceIdentifierGenerator()
        self._clock = clock or datetime.now
        self._discount = 0
        self._pending_id: Optional[str] = None
        self.log = logger.bind(session=uuid.uuid4().hex[:8], prefix=self.prefix)

    # --- cart ---

    def add_product(
        self, product: Product, quantity: int = 1, effective_price: Optional[int] = None
    ) -> LineItem:
        line = self.ledger.add_or_merge(product, quantity, effective_price)
        self.log.info("item_added", product_id=product.id, quantity=line.quantity)
        return line

    def add_by_code(self, catalog: ProductLookup, code: str, quantity: int = 1) -> LineItem:
        return self.add_product(lookup_scan(catalog, code), quantity)

    def add_scanned(self, catalog: ProductLookup, scan: Union[ScanResult, str], quantity: int = 1) -> LineItem:
        if isinstance(scan, str):
            scan = ScanResult.of(scan)
        return self.add_product(resolve_scan(catalog, scan), quantity)

    def set_quantity(self, line_id: str, quantity: int) -> None:
        self.ledger.set_quantity(line_id, quantity)

    def remove(self, line_id: str) -> None:
        self.ledger.remove(line_id)

    # --- pricing ---

    @property
    def discount(self) -> int:
        return self._discount

    def set_discount(self, amount: int) -> None:
        require_non_negative_discount(amount)
        self._discount = amount

    def summary(self) -> pricing.PriceSummary:
        return pricing.summarize(self.ledger.items(), self._discount)

    # --- payment ---

    @property
    def payment_method(self) -> str:
        return self.channels.selected

    def select_payment(self, channel: str) -> Optional[PaymentPayload]:
        return self.channels.select(channel)

    def update_config(self, config: StorePaymentConfig) -> None:
        self.channels.update_config(config)

    # --- finalize ---

    def build_transaction(self, existing_ids: Iterable[str], when: Optional[datetime] = None) -> Transaction:
        """Snapshot the session into a Transaction without touching the ledger."""
        require_not_empty(self.ledger, errmsg.LEDGER_EMPTY)
        when = when or self._clock()
        if self._pending_id is None:
            self._pending_id = self._generator.next_id(self.prefix, existing_ids, when)

        items = self.ledger.snapshot()
        figures = pricing.summarize(items, self._discount)
        return Transaction(
            id=self._pending_id,
            items=items,
            subtotal=figures.subtotal,
            discount=figures.discount,
            total=figures.total,
            profit=figures.profit,
            payment_method=self.channels.selected,
            created_at=when,
            is_manual=self.is_manual,
            payment_payload=self.channels.payload_text(self.channels.selected),
        )

    def finalize(
        self,
        store: TransactionStore,
        existing_ids: Iterable[str],
        when: Optional[datetime] = None,
    ) -> Transaction:
        """Build the transaction, hand it to ``store`` and reset on ack.

        A failed append raises PersistenceFailure and keeps the ledger,
        discount, selection and reserved id so the retry issues the same id.
        """
        transaction = self.build_transaction(existing_ids, when)
        log = self.log.bind(invoice_id=transaction.id)
        try:
            ack = store.append(transaction)
        except Exception as e:
            log.error("transaction_persist_failed", error=str(e))
            raise PersistenceFailure(transaction.id, e) from e
        if ack is False:
            log.error("transaction_persist_failed", error=errmsg.PERSIST_REJECTED)
            raise PersistenceFailure(transaction.id)

        log.info(
            "transaction_finalized",
            total=transaction.total,
            payment_method=transaction.payment_method,
            items=len(transaction.items),
        )
        self.reset()
        return transaction

    def reset(self) -> None:
        """Start a fresh invoice: empty ledger, no discount, cash."""
        self.ledger.clear()
        self._discount = 0
        self._pending_id = None
        self.channels.reset()
