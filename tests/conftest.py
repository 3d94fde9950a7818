"""Shared pytest fixtures for settlement tests."""

from datetime import datetime

import pytest

from fixtures import RecordingRenderer, RecordingStore, make_product
from pos_settlement.models import Product, StorePaymentConfig


@pytest.fixture
def rice() -> Product:
    return make_product("prod-rice", "Beras 5kg", 10000, 6000, code="BRS5", barcode="8991234500011")


@pytest.fixture
def oil() -> Product:
    return make_product("prod-oil", "Minyak Goreng 1L", 18000, 15000, code="MYK1", barcode="8991234500028")


@pytest.fixture
def sugar() -> Product:
    return make_product("prod-sugar", "Gula Pasir 1kg", 14500, 12000, code="GLP1")


@pytest.fixture
def full_config() -> StorePaymentConfig:
    return StorePaymentConfig(
        bank_name="BCA",
        bank_account_number="1234567890",
        bank_account_holder="Toko Maju",
        gopay_number="0812-1111-2222",
        ovo_number="0813 3333 4444",
        dana_number="0812-345-6789",
        shopeepay_number="+62 815 5555 6666",
    )


@pytest.fixture
def gopay_only() -> StorePaymentConfig:
    return StorePaymentConfig(gopay_number="081211112222")


@pytest.fixture
def jan5() -> datetime:
    return datetime(2025, 1, 5, 10, 30)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()
