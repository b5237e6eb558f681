import pytest

from tdatrade.execution.preparer import OrderPreparer
from tdatrade.execution.validator import OrderValidationError, OrderValidator
from tdatrade.models.order import EquityOrder


def _order(qty=10):
    return (
        EquityOrder.builder()
        .with_account_id("123456")
        .with_action("sell")
        .with_order_type("limit")
        .with_price("101.25")
        .with_expire("day")
        .with_quantity(qty)
        .with_symbol("aapl")
        .build()
    )


def test_prepare_returns_form_params():
    params = OrderPreparer(key="orderstring").prepare(_order())
    assert list(params) == ["orderstring"]
    assert "symbol=AAPL" in params["orderstring"]
    assert "price=101.25" in params["orderstring"]


def test_prepare_raises_on_invalid():
    with pytest.raises(OrderValidationError):
        OrderPreparer().prepare(_order(qty=0))


def test_prepare_many_skips_invalid(caplog):
    caplog.set_level("INFO")
    p = OrderPreparer(validator=OrderValidator(strict=True))
    out = p.prepare_many([_order(), _order(qty=0), _order(qty=5)])
    assert len(out) == 2
    assert any("Order rejected" in r.message for r in caplog.records)
    assert any("Prepared 2/3" in r.message for r in caplog.records)
