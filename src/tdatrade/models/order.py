# src/tdatrade/models/order.py
from __future__ import annotations
from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union

DecimalLike = Union[Decimal, int, float, str]

SEPARATOR = "~"
DEFAULT_QUERY_KEY = "orderstring"


class _WireEnum(str, Enum):
    """API가 기대하는 소문자 값 그대로 직렬화"""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value):
        if value is None or isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class EquityAction(_WireEnum):
    BUY = "buy"
    SELL = "sell"
    SELL_SHORT = "sellshort"
    BUY_TO_COVER = "buytocover"


class Expire(_WireEnum):
    DAY = "day"
    MOC = "moc"
    DAY_EXT = "day_ext"
    GTC = "gtc"
    GTC_EXT = "gtc_ext"
    AM = "am"
    PM = "pm"


class OrderType(_WireEnum):
    MARKET = "market"
    LIMIT = "limit"
    STOP_MARKET = "stop_market"
    STOP_LIMIT = "stop_limit"
    TSTOP_PERCENT = "tstoppercent"
    TSTOP_DOLLAR = "tstopdollar"


class Routing(_WireEnum):
    AUTO = "auto"
    INET = "inet"
    ECN_ARCA = "ecn_arca"


class SpecialInstruction(_WireEnum):
    NONE = "none"
    FOK = "fok"
    AON = "aon"
    DNR = "dnr"
    AON_DNR = "aon_dnr"


# 필드 → 쿼리 파라미터 이름 (선언 순서 = 직렬화 순서)
WIRE_NAMES: Dict[str, str] = {
    "client_order_id": "clientorderid",
    "account_id": "accountid",
    "action": "action",
    "act_price": "actprice",
    "display_size": "displaysize",
    "expire": "expire",
    "expire_day": "exday",
    "expire_month": "exmonth",
    "expire_year": "exyear",
    "order_type": "ordtype",
    "price": "price",
    "quantity": "quantity",
    "routing": "routing",
    "special_instruction": "spinstructions",
    "symbol": "symbol",
    "ts_param": "tsparam",
}


def _upper(s: Optional[str]) -> Optional[str]:
    return s.upper() if s is not None else None


def _to_decimal(v: Optional[DecimalLike]) -> Optional[Decimal]:
    if v is None or isinstance(v, Decimal):
        return v
    # float는 str()을 거쳐야 2진 오차(12.5000000001...)가 안 붙는다
    return Decimal(str(v))


@dataclass(frozen=True)
class EquityOrder:
    """
    Equity trade request for the TDA trade API.

    Build it with ``EquityOrder.builder()``; the instance is read-only.
    Field constraints are checked by ``tdatrade.execution.validator``,
    not here.
    """

    account_id: Optional[str] = None
    action: Optional[EquityAction] = None
    expire: Optional[Expire] = None
    order_type: Optional[OrderType] = None
    quantity: Optional[int] = None
    symbol: Optional[str] = None
    client_order_id: Optional[str] = None
    act_price: Optional[Decimal] = None  # stop price (stop_market / stop_limit)
    display_size: Optional[int] = None
    expire_day: Optional[str] = None  # gtc 일 때만
    expire_month: Optional[str] = None
    expire_year: Optional[str] = None
    price: Optional[Decimal] = None  # limit price (limit / stop_limit)
    routing: Optional[Routing] = Routing.AUTO
    special_instruction: Optional[SpecialInstruction] = SpecialInstruction.NONE
    ts_param: Optional[str] = None  # trailing stop: percent or dollars

    def __post_init__(self):
        object.__setattr__(self, "symbol", _upper(self.symbol))

    @classmethod
    def builder(cls) -> "EquityOrderBuilder":
        return EquityOrderBuilder()

    def to_query_string_map(self) -> Dict[str, str]:
        """Non-empty fields keyed by their wire name, in declaration order."""
        params: Dict[str, str] = {}
        for attr, name in WIRE_NAMES.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, str) and not isinstance(value, Enum):
                if not value.strip():
                    continue
            params[name] = str(value)
        return params

    def to_query_string(self) -> str:
        """``name=value`` pairs joined by ``~``. Values are not escaped."""
        return SEPARATOR.join(f"{k}={v}" for k, v in self.to_query_string_map().items())

    def to_form_params(self, key: str = DEFAULT_QUERY_KEY) -> Dict[str, str]:
        return {key: self.to_query_string()}


class EquityOrderBuilder:
    """Fluent staging object for :class:`EquityOrder`. No validation here."""

    def __init__(self):
        self._values: Dict[str, object] = {f.name: f.default for f in fields(EquityOrder)}

    def _set(self, name: str, value) -> "EquityOrderBuilder":
        self._values[name] = value
        return self

    def with_client_order_id(self, client_order_id: Optional[str]) -> "EquityOrderBuilder":
        return self._set("client_order_id", client_order_id)

    def with_account_id(self, account_id: Optional[str]) -> "EquityOrderBuilder":
        return self._set("account_id", account_id)

    def with_action(self, action) -> "EquityOrderBuilder":
        return self._set("action", EquityAction.coerce(action))

    def with_act_price(self, act_price: Optional[DecimalLike]) -> "EquityOrderBuilder":
        return self._set("act_price", _to_decimal(act_price))

    def with_display_size(self, display_size: Optional[int]) -> "EquityOrderBuilder":
        return self._set("display_size", display_size)

    def with_expire(self, expire) -> "EquityOrderBuilder":
        return self._set("expire", Expire.coerce(expire))

    def with_expire_day(self, expire_day: Optional[str]) -> "EquityOrderBuilder":
        return self._set("expire_day", expire_day)

    def with_expire_month(self, expire_month: Optional[str]) -> "EquityOrderBuilder":
        return self._set("expire_month", expire_month)

    def with_expire_year(self, expire_year: Optional[str]) -> "EquityOrderBuilder":
        return self._set("expire_year", expire_year)

    def with_order_type(self, order_type) -> "EquityOrderBuilder":
        return self._set("order_type", OrderType.coerce(order_type))

    def with_price(self, price: Optional[DecimalLike]) -> "EquityOrderBuilder":
        return self._set("price", _to_decimal(price))

    def with_quantity(self, quantity: Optional[int]) -> "EquityOrderBuilder":
        return self._set("quantity", quantity)

    def with_routing(self, routing) -> "EquityOrderBuilder":
        return self._set("routing", Routing.coerce(routing))

    def with_special_instruction(self, special_instruction) -> "EquityOrderBuilder":
        return self._set("special_instruction", SpecialInstruction.coerce(special_instruction))

    def with_symbol(self, symbol: Optional[str]) -> "EquityOrderBuilder":
        return self._set("symbol", _upper(symbol))

    def with_ts_param(self, ts_param: Optional[str]) -> "EquityOrderBuilder":
        return self._set("ts_param", ts_param)

    def build(self) -> EquityOrder:
        return EquityOrder(**self._values)

    def build_validated(self, strict: bool = False) -> EquityOrder:
        """build() + 검증. 위반이 있으면 OrderValidationError"""
        from tdatrade.execution.validator import OrderValidationError, validate

        order = self.build()
        violations = validate(order, strict=strict)
        if violations:
            raise OrderValidationError(violations)
        return order
