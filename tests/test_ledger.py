"""Tests for the line item ledger."""

import pytest

from fixtures import make_product
from pos_settlement.errors import InvalidPriceError, InvalidQuantityError
from pos_settlement.ledger import LineItemLedger


@pytest.fixture
def ledger() -> LineItemLedger:
    return LineItemLedger()


class TestAddOrMerge:
    def test_new_line_uses_sell_price(self, ledger, rice):
        line = ledger.add_or_merge(rice, 2)
        assert line.quantity == 2
        assert line.effective_price == rice.sell_price
        assert len(ledger) == 1

    def test_repeated_adds_merge_into_one_line(self, ledger, rice):
        for qty in (1, 3, 2):
            ledger.add_or_merge(rice, qty)
        assert len(ledger) == 1
        assert ledger.get(rice.id).quantity == 6

    def test_first_add_price_wins(self, ledger, rice):
        ledger.add_or_merge(rice, 1, effective_price=9000)
        ledger.add_or_merge(rice, 2, effective_price=8000)
        ledger.add_or_merge(rice, 1)
        line = ledger.get(rice.id)
        assert line.quantity == 4
        assert line.effective_price == 9000

    def test_preserves_insertion_order(self, ledger, rice, oil, sugar):
        ledger.add_or_merge(oil, 1)
        ledger.add_or_merge(rice, 1)
        ledger.add_or_merge(sugar, 1)
        ledger.add_or_merge(oil, 1)
        assert [line.line_id for line in ledger.items()] == [oil.id, rice.id, sugar.id]

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_rejects_non_positive_quantity(self, ledger, rice, quantity):
        with pytest.raises(InvalidQuantityError):
            ledger.add_or_merge(rice, quantity)
        assert ledger.is_empty()

    def test_rejects_negative_price_override(self, ledger, rice):
        with pytest.raises(InvalidPriceError):
            ledger.add_or_merge(rice, 1, effective_price=-1)

    def test_zero_price_override_allowed(self, ledger, rice):
        assert ledger.add_or_merge(rice, 1, effective_price=0).effective_price == 0


class TestSetQuantity:
    def test_overwrites_in_place(self, ledger, rice, oil):
        ledger.add_or_merge(rice, 1)
        ledger.add_or_merge(oil, 1)
        ledger.set_quantity(rice.id, 5)
        assert [(l.line_id, l.quantity) for l in ledger] == [(rice.id, 5), (oil.id, 1)]

    def test_zero_equals_remove(self, rice, oil):
        a, b = LineItemLedger(), LineItemLedger()
        for led in (a, b):
            led.add_or_merge(rice, 2)
            led.add_or_merge(oil, 1)
        a.set_quantity(rice.id, 0)
        b.remove(rice.id)
        assert [(l.line_id, l.quantity) for l in a] == [(l.line_id, l.quantity) for l in b]

    def test_negative_removes(self, ledger, rice):
        ledger.add_or_merge(rice, 2)
        ledger.set_quantity(rice.id, -3)
        assert rice.id not in ledger

    def test_absent_line_is_noop(self, ledger, rice):
        ledger.set_quantity("missing", 0)
        ledger.set_quantity("missing", 4)
        assert ledger.is_empty()


class TestRemoveAndClear:
    def test_remove_is_idempotent(self, ledger, rice):
        ledger.add_or_merge(rice, 1)
        ledger.remove(rice.id)
        ledger.remove(rice.id)
        assert ledger.is_empty()

    def test_clear(self, ledger, rice, oil):
        ledger.add_or_merge(rice, 1)
        ledger.add_or_merge(oil, 1)
        ledger.clear()
        assert len(ledger) == 0
        assert ledger.subtotal() == 0


class TestSnapshot:
    def test_snapshot_is_detached(self, ledger, rice):
        ledger.add_or_merge(rice, 2)
        snap = ledger.snapshot()
        ledger.add_or_merge(rice, 5)
        ledger.set_quantity(rice.id, 4)
        ledger.clear()
        assert snap[0].quantity == 2

    def test_subtotal(self, ledger, rice, oil):
        ledger.add_or_merge(rice, 2)
        ledger.add_or_merge(oil, 1, effective_price=17000)
        assert ledger.subtotal() == 2 * 10000 + 17000

    def test_subtotal_is_order_independent(self, rice, oil, sugar):
        a, b = LineItemLedger(), LineItemLedger()
        a.add_or_merge(rice, 2)
        a.add_or_merge(oil, 1)
        a.add_or_merge(sugar, 3)
        a.add_or_merge(rice, 1)
        b.add_or_merge(sugar, 1)
        b.add_or_merge(rice, 3)
        b.add_or_merge(sugar, 2)
        b.add_or_merge(oil, 1)
        assert a.subtotal() == b.subtotal()

    def test_many_small_additions_stay_exact(self, ledger):
        product = make_product("p-cheap", "Permen", sell_price=1, cost_price=0)
        for _ in range(1000):
            ledger.add_or_merge(product, 1)
        assert ledger.subtotal() == 1000
