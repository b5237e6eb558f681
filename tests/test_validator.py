from dataclasses import replace

import pytest

from tdatrade.execution.validator import (
    OrderValidationError,
    OrderValidator,
    validate,
)
from tdatrade.models.order import (
    EquityAction,
    EquityOrder,
    Expire,
    OrderType,
    Routing,
)


def _base():
    return (
        EquityOrder.builder()
        .with_account_id("123456")
        .with_action(EquityAction.BUY)
        .with_order_type(OrderType.MARKET)
        .with_expire(Expire.DAY)
        .with_quantity(1)
        .with_symbol("msft")
    )


def _fields(violations):
    return [v.field for v in violations]


def test_minimal_order_is_valid():
    assert validate(_base().build()) == []


def test_empty_order_reports_every_required_field():
    fields = _fields(validate(EquityOrder.builder().build()))
    assert fields == ["account_id", "action", "expire", "order_type", "quantity", "symbol"]


def test_blank_account_id_rejected():
    assert _fields(validate(_base().with_account_id("  ").build())) == ["account_id"]


@pytest.mark.parametrize("qty", [0, -1, -100])
def test_quantity_must_be_positive(qty):
    v = validate(_base().with_quantity(qty).build())
    assert _fields(v) == ["quantity"]
    assert v[0].message == "Must have 1 or more for quantity"


@pytest.mark.parametrize("qty", [1, 2, 1000])
def test_quantity_accepts_one_and_above(qty):
    assert validate(_base().with_quantity(qty).build()) == []


@pytest.mark.parametrize("size", [100, 200, 1000])
def test_display_size_accepted(size):
    assert validate(_base().with_display_size(size).build()) == []


@pytest.mark.parametrize("size", [50, 150, -100, 0])
def test_display_size_rejected(size):
    assert _fields(validate(_base().with_display_size(size).build())) == ["display_size"]


@pytest.mark.parametrize("value", ["08", "15", None])
def test_expiration_parts_accept_two_digits_or_absent(value):
    o = _base().with_expire_day(value).with_expire_month(value).with_expire_year(value).build()
    assert validate(o) == []


@pytest.mark.parametrize("value", ["8", "123", "ab", ""])
def test_expiration_parts_reject_other_patterns(value):
    o = _base().with_expire_day(value).with_expire_month(value).with_expire_year(value).build()
    assert _fields(validate(o)) == ["expire_day", "expire_month", "expire_year"]


def test_cross_field_rules_only_when_strict():
    o = _base().with_order_type(OrderType.STOP_LIMIT).build()
    assert validate(o) == []
    assert _fields(validate(o, strict=True)) == ["price", "act_price"]


def test_strict_trailing_stop_needs_ts_param():
    o = _base().with_order_type(OrderType.TSTOP_PERCENT).with_ts_param(" ").build()
    assert _fields(validate(o, strict=True)) == ["ts_param"]


def test_strict_gtc_requires_full_date():
    o = _base().with_expire(Expire.GTC).with_expire_day("08").build()
    assert _fields(validate(o, strict=True)) == ["expire_month", "expire_year"]


def test_strict_expiration_date_only_for_gtc():
    o = _base().with_expire_day("08").build()
    assert _fields(validate(o, strict=True)) == ["expire_day"]


def test_strict_display_size_needs_inet_routing():
    o = _base().with_display_size(100).build()
    assert _fields(validate(o, strict=True)) == ["display_size"]
    assert validate(replace(o, routing=Routing.INET), strict=True) == []


def test_build_validated_raises_with_all_violations():
    with pytest.raises(OrderValidationError) as ei:
        _base().with_quantity(0).with_symbol("").build_validated()
    assert _fields(ei.value.violations) == ["quantity", "symbol"]
    assert "quantity: Must have 1 or more for quantity" in str(ei.value)


def test_validator_logs_rejection(caplog):
    caplog.set_level("WARNING")
    OrderValidator().validate(_base().with_quantity(-1).build())
    assert any("Order rejected" in r.message for r in caplog.records)


def test_validator_check_returns_valid_order():
    o = _base().build()
    assert OrderValidator(strict=True).check(o) is o
