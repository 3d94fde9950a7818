"""Invoice identifier generation.

Ids look like ``<prefix>-<counter><ddmmyy>``, e.g. ``QCK-1050125`` for the
first quick invoice on 5 January 2025. The date suffix is always six digits,
so an id splits unambiguously from the right.

The suffix is day, month, year on purpose. The older web till wrote it year
first (``250105``). Do not switch back: ``parse_invoice_id`` reads stored
ids as ``ddmmyy``.

Two generators exist:

- ``count_based_invoice_id`` derives the counter by counting existing ids with
  the same prefix. Two callers holding the same stale list get the same id.
- ``InvoiceSequence`` reserves counters per (prefix, day) under a lock and
  never hands out a number twice within the process. Checkout uses this one.
"""

import re
import threading
from collections.abc import Iterable
from datetime import date, datetime
from typing import Optional, Union

import structlog

from .errors import InvalidInvoiceIdError

logger = structlog.get_logger()

QUICK_PREFIX = "QCK"
STANDARD_PREFIX = "INV"

DATE_FORMAT = "%d%m%y"

_PREFIX_CHARS = r"[A-Za-z0-9]+"
_PREFIX_PATTERN = re.compile(rf"^{_PREFIX_CHARS}$")
_ID_PATTERN = re.compile(rf"^(?P<prefix>{_PREFIX_CHARS})-(?P<counter>\d+)(?P<date>\d{{6}})$")

DateLike = Union[date, datetime]


def encode_date(when: DateLike) -> str:
    """Six-digit day, month, two-digit year: 2025-01-05 -> ``050125``."""
    return when.strftime(DATE_FORMAT)


def format_invoice_id(prefix: str, counter: int, when: DateLike) -> str:
    return f"{prefix}-{counter}{encode_date(when)}"


def is_valid_prefix(prefix: str) -> bool:
    """Prefixes are letters and digits only, so ``parse_invoice_id`` can split them back."""
    return bool(_PREFIX_PATTERN.fullmatch(prefix))


def count_with_prefix(prefix: str, existing_ids: Iterable[str]) -> int:
    marker = f"{prefix}-"
    return sum(1 for invoice_id in existing_ids if invoice_id.startswith(marker))


def count_based_invoice_id(prefix: str, existing_ids: Iterable[str], when: DateLike) -> str:
    """Counter = 1 + number of existing ids carrying ``prefix``.

    Callers must pass the authoritative list at call time. Generating twice
    from the same snapshot yields the same id.
    """
    return format_invoice_id(prefix, count_with_prefix(prefix, existing_ids) + 1, when)


def parse_invoice_id(invoice_id: str) -> tuple[str, int, date]:
    """Split an id into ``(prefix, counter, date)``."""
    match = _ID_PATTERN.match(invoice_id)
    if match is None:
        raise InvalidInvoiceIdError(invoice_id)
    try:
        day = datetime.strptime(match.group("date"), DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidInvoiceIdError(invoice_id) from e
    return match.group("prefix"), int(match.group("counter")), day


class InvoiceSequence:
    """Atomically reserved per-(prefix, day) invoice counters.

    The first reservation for a key is seeded from the existing ids so a
    fresh process continues after records already persisted. Every later
    reservation is a compare-and-increment against the stored value.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[tuple[str, date], int] = {}

    def reserve(
        self,
        prefix: str,
        when: DateLike,
        existing_ids: Iterable[str] = (),
    ) -> int:
        existing = set(existing_ids)
        day = when.date() if isinstance(when, datetime) else when
        key = (prefix, day)
        with self._lock:
            counter = max(self._counters.get(key, 0), count_with_prefix(prefix, existing)) + 1
            # Skip numbers already taken, e.g. after deletions shrank the count.
            while format_invoice_id(prefix, counter, day) in existing:
                counter += 1
            self._counters[key] = counter
        logger.debug("invoice_counter_reserved", prefix=prefix, day=day.isoformat(), counter=counter)
        return counter

    def peek(self, prefix: str, when: DateLike) -> int:
        """Last counter reserved for the key, 0 if none."""
        day = when.date() if isinstance(when, datetime) else when
        with self._lock:
            return self._counters.get((prefix, day), 0)


class InvoiceIdentifierGenerator:
    """Issues invoice ids from an ``InvoiceSequence``."""

    def __init__(self, sequence: Optional[InvoiceSequence] = None):
        self.sequence = sequence or InvoiceSequence()

    def next_id(self, prefix: str, existing_ids: Iterable[str], when: DateLike) -> str:
        existing_ids = tuple(existing_ids)
        counter = self.sequence.reserve(prefix, when, existing_ids)
        return format_invoice_id(prefix, counter, when)
