from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List

from tdatrade.models.order import EquityOrder, Expire, OrderType, Routing

log = logging.getLogger("validator")

_TWO_DIGITS = re.compile(r"[0-9]{2}")

MSG_ACCOUNT = (
    "The account id cannot be empty. To use the default set 'account.default_id' "
    "in the config or the TDA_ACCOUNT_ID environment variable"
)
MSG_ACTION = "Action cannot be empty - must be either 'sell', 'buy', 'sellshort' or 'buytocover'"
MSG_DISPLAY_SIZE = "display size needs to be integer value 100 or higher, in increments of 100"
MSG_EXPIRE = "expire type is required, one of [day, moc, day_ext, gtc, gtc_ext, am, pm]"
MSG_EXPIRE_DAY = "The expiration day must be a two digit day (e.g. 08 or 15)"
MSG_EXPIRE_MONTH = "The expiration month must be a two digit month (e.g. 08 or 11)"
MSG_EXPIRE_YEAR = "The expiration year must be a two digit year (e.g. 20 for 2020)"
MSG_ORDER_TYPE = (
    "orderType required - must be one of "
    "[market, limit, stop_market, stop_limit, tstoppercent, tstopdollar]"
)
MSG_QTY_MISSING = "the quantity must be set to 1 or more"
MSG_QTY_POSITIVE = "Must have 1 or more for quantity"
MSG_SYMBOL = "the equity symbol in uppercase (e.g. MSFT) is missing."

_LIMIT_TYPES = (OrderType.LIMIT, OrderType.STOP_LIMIT)
_STOP_TYPES = (OrderType.STOP_MARKET, OrderType.STOP_LIMIT)
_TRAILING_TYPES = (OrderType.TSTOP_PERCENT, OrderType.TSTOP_DOLLAR)


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class OrderValidationError(ValueError):
    def __init__(self, violations: Iterable[Violation]):
        self.violations: List[Violation] = list(violations)
        super().__init__("; ".join(str(v) for v in self.violations))


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _blank(s) -> bool:
    return s is None or not str(s).strip()


def validate(order: EquityOrder, strict: bool = False) -> List[Violation]:
    """
    주문 필드 제약 검사. 예외 없이 위반 목록만 돌려준다 (빈 리스트 = 통과).
    strict=True 이면 주문유형/만기 조합(교차 필드) 규칙도 본다.
    """
    out: List[Violation] = []

    if _blank(order.account_id):
        out.append(Violation("account_id", MSG_ACCOUNT))
    if order.action is None:
        out.append(Violation("action", MSG_ACTION))
    if order.display_size is not None:
        ds = order.display_size
        if not _is_int(ds) or ds < 100 or ds % 100 != 0:
            out.append(Violation("display_size", MSG_DISPLAY_SIZE))
    if order.expire is None:
        out.append(Violation("expire", MSG_EXPIRE))
    for name, msg in (
        ("expire_day", MSG_EXPIRE_DAY),
        ("expire_month", MSG_EXPIRE_MONTH),
        ("expire_year", MSG_EXPIRE_YEAR),
    ):
        value = getattr(order, name)
        if value is not None and not _TWO_DIGITS.fullmatch(str(value)):
            out.append(Violation(name, msg))
    if order.order_type is None:
        out.append(Violation("order_type", MSG_ORDER_TYPE))
    if order.quantity is None:
        out.append(Violation("quantity", MSG_QTY_MISSING))
    elif not _is_int(order.quantity) or order.quantity <= 0:
        out.append(Violation("quantity", MSG_QTY_POSITIVE))
    if not order.symbol:
        out.append(Violation("symbol", MSG_SYMBOL))

    if strict:
        out.extend(_cross_field(order))
    return out


def _cross_field(order: EquityOrder) -> List[Violation]:
    out: List[Violation] = []
    ot = order.order_type

    if ot in _LIMIT_TYPES and order.price is None:
        out.append(Violation("price", f"a limit price is required for {ot} orders"))
    if ot in _STOP_TYPES and order.act_price is None:
        out.append(Violation("act_price", f"a stop price is required for {ot} orders"))
    if ot in _TRAILING_TYPES and _blank(order.ts_param):
        out.append(Violation("ts_param", f"a trailing stop parameter is required for {ot} orders"))

    exp_parts = ("expire_day", "expire_month", "expire_year")
    if order.expire == Expire.GTC:
        for name in exp_parts:
            if _blank(getattr(order, name)):
                out.append(Violation(name, "expiration day, month and year are required for gtc orders"))
    elif order.expire is not None:
        for name in exp_parts:
            if not _blank(getattr(order, name)):
                out.append(Violation(name, f"expiration date is only allowed for gtc orders, not {order.expire}"))

    if order.display_size is not None and order.routing != Routing.INET:
        out.append(Violation("display_size", "display size is only used when routing is inet"))
    return out


class OrderValidator:
    def __init__(self, strict: bool = False):
        self.strict = strict

    def validate(self, order: EquityOrder) -> List[Violation]:
        violations = validate(order, strict=self.strict)
        if violations:
            log.warning(
                "Order rejected: %s %s (%d violation(s)) %s",
                order.action,
                order.symbol,
                len(violations),
                "; ".join(str(v) for v in violations),
            )
        return violations

    def check(self, order: EquityOrder) -> EquityOrder:
        violations = self.validate(order)
        if violations:
            raise OrderValidationError(violations)
        return order
