"""Payment channel selection and availability.

States: ``cash`` (initial), ``transfer``, ``ewallet-<provider>`` per
provider, and the legacy ``qris``. A channel can be selected only when the
store config carries every field it needs; cash is always available.
"""

from typing import Optional

import structlog

from .errors import ChannelUnavailableError, errmsg
from .models import EWalletProvider, PaymentPayload, StorePaymentConfig
from .payload_cache import PayloadCache
from .payloads import CASH, QRIS, TRANSFER, encode_channel_payload, parse_provider

logger = structlog.get_logger()

ALL_CHANNELS: tuple[str, ...] = (
    (CASH, TRANSFER) + tuple(p.channel for p in EWalletProvider) + (QRIS,)
)


def is_known_channel(channel: str) -> bool:
    return channel in ALL_CHANNELS


def is_available(channel: str, config: StorePaymentConfig) -> bool:
    if channel == CASH:
        return True
    if channel == TRANSFER:
        return config.has_bank_transfer()
    if channel == QRIS:
        return config.has_legacy_qris()
    if not is_known_channel(channel):
        return False
    provider = parse_provider(channel)
    return provider is not None and config.has_ewallet(provider)


def available_channels(config: StorePaymentConfig) -> tuple[str, ...]:
    """Selectable channels in display order: cash, transfer, e-wallets, qris."""
    return tuple(c for c in ALL_CHANNELS if is_available(c, config))


def _source_fields(channel: str, config: StorePaymentConfig) -> tuple:
    """Store values a channel's payload is derived from."""
    if channel == TRANSFER:
        return (config.bank_name, config.bank_account_number, config.bank_account_holder)
    if channel == QRIS:
        return (config.ewallet_number,)
    provider = parse_provider(channel)
    return (config.phone_for(provider),) if provider is not None else ()


class PaymentChannelResolver:
    """Tracks the selected channel and produces its payload.

    Encoded payloads are remembered per (channel, source field values), so
    coming back to a channel whose store fields did not change reuses the
    earlier string. Images are rendered through an optional PayloadCache.
    """

    def __init__(self, config: StorePaymentConfig, cache: Optional[PayloadCache] = None):
        self._config = config
        self._cache = cache
        self._selected = CASH
        self._encoded: dict[tuple[str, tuple], str] = {}

    @property
    def config(self) -> StorePaymentConfig:
        return self._config

    @property
    def selected(self) -> str:
        return self._selected

    def available(self) -> tuple[str, ...]:
        return available_channels(self._config)

    def select(self, channel: str) -> Optional[PaymentPayload]:
        """Switch to ``channel`` and kick off its payload generation.

        Raises ChannelUnavailableError, leaving the selection unchanged, when
        the channel is unknown or not configured.
        """
        if not is_known_channel(channel):
            raise ChannelUnavailableError(channel, errmsg.CHANNEL_UNKNOWN)
        if not is_available(channel, self._config):
            raise ChannelUnavailableError(channel)

        self._selected = channel
        logger.info("channel_selected", channel=channel)
        return self.current_payload()

    def reset(self) -> None:
        self._selected = CASH

    def update_config(self, config: StorePaymentConfig) -> None:
        """Swap in a new store snapshot; fall back to cash if the selection vanished."""
        self._config = config
        if not is_available(self._selected, config):
            logger.info("channel_unavailable_after_update", channel=self._selected)
            self._selected = CASH

    def payload_text(self, channel: str) -> str:
        """Encoded payload for ``channel`` under the current config, ``""`` for none."""
        if channel == CASH or not is_available(channel, self._config):
            return ""
        key = (channel, _source_fields(channel, self._config))
        payload = self._encoded.get(key)
        if payload is None:
            payload = encode_channel_payload(channel, self._config)
            self._encoded[key] = payload
        return payload

    def payload_for(self, channel: str) -> Optional[PaymentPayload]:
        payload = self.payload_text(channel)
        if not payload:
            return None
        if self._cache is None:
            return PaymentPayload(channel=channel, payload=payload)
        self._cache.schedule(channel, payload)
        cached = self._cache.get(channel, payload)
        return cached or PaymentPayload(channel=channel, payload=payload)

    def current_payload(self) -> Optional[PaymentPayload]:
        """Payload for the selected channel; ``None`` for cash."""
        return self.payload_for(self._selected)

    def prefetch(self) -> None:
        """Start payload generation for every available non-cash channel."""
        for channel in self.available():
            if channel != CASH:
                self.payload_for(channel)
