"""Payload encoders for payment channels.

Every function here is pure: the same inputs always give the same string,
and no function touches image bytes. An empty string means "nothing to
render" and is returned instead of raising for unknown providers or
missing data.
"""

import re
from typing import Optional, Union

from .models import EWalletProvider, StorePaymentConfig

CASH = "cash"
TRANSFER = "transfer"
QRIS = "qris"
EWALLET_PREFIX = "ewallet-"

# One URI template per provider. Adding a provider is a new row here.
DEEP_LINK_TEMPLATES: dict[EWalletProvider, str] = {
    EWalletProvider.GOPAY: "gopay://qr?phone={phone}",
    EWalletProvider.OVO: "ovo://qr?phone={phone}",
    EWalletProvider.DANA: "dana://qr?phone={phone}",
    EWalletProvider.SHOPEEPAY: "shopeepay://qr?phone={phone}",
}

BANK_LABELS = ("Bank", "No. Rekening", "Atas Nama")

QRIS_HEADER = "00020101021126"
QRIS_TRAILER = "5303360"

_NON_DIGIT = re.compile(r"\D")

ProviderLike = Union[EWalletProvider, str]


def normalize_phone(raw_phone: Optional[str]) -> str:
    """Strip every non-digit: ``"0812-345-6789"`` -> ``"08123456789"``."""
    if not raw_phone:
        return ""
    return _NON_DIGIT.sub("", raw_phone)


def parse_provider(provider: ProviderLike) -> Optional[EWalletProvider]:
    """Resolve an enum, a provider id (``"dana"``) or a channel tag (``"ewallet-dana"``)."""
    if isinstance(provider, EWalletProvider):
        return provider
    if not isinstance(provider, str):
        return None
    name = provider.strip().lower()
    if name.startswith(EWALLET_PREFIX):
        name = name[len(EWALLET_PREFIX):]
    try:
        return EWalletProvider(name)
    except ValueError:
        return None


def encode_bank_transfer(bank_name: str, account_number: str, account_holder: str) -> str:
    """Bank name, account number, holder; one labelled line each, in that order."""
    values = (bank_name, account_number, account_holder)
    return "\n".join(
        f"{label}: {(value or '').strip()}" for label, value in zip(BANK_LABELS, values)
    )


def encode_ewallet_deep_link(provider: ProviderLike, raw_phone: Optional[str]) -> str:
    resolved = parse_provider(provider)
    if resolved is None:
        return ""
    phone = normalize_phone(raw_phone)
    if not phone:
        return ""
    return DEEP_LINK_TEMPLATES[resolved].format(phone=phone)


def encode_qris_legacy(ewallet_number: Optional[str]) -> str:
    """Legacy QRIS-style block built from the single store e-wallet number.

    Layout: header, two-digit zero-padded length, the number, currency trailer.
    """
    number = (ewallet_number or "").strip()
    if not number:
        return ""
    return f"{QRIS_HEADER}{len(number):02d}{number}{QRIS_TRAILER}"


def encode_channel_payload(channel: str, config: StorePaymentConfig) -> str:
    """Payload for ``channel`` from the store config, ``""`` when there is none."""
    if channel == TRANSFER:
        if not config.has_bank_transfer():
            return ""
        return encode_bank_transfer(
            config.bank_name, config.bank_account_number, config.bank_account_holder
        )
    if channel == QRIS:
        return encode_qris_legacy(config.ewallet_number)
    if channel.startswith(EWALLET_PREFIX):
        provider = parse_provider(channel)
        if provider is None:
            return ""
        return encode_ewallet_deep_link(provider, config.phone_for(provider))
    return ""
