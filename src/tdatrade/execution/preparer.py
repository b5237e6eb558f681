import logging

from tdatrade.models.order import DEFAULT_QUERY_KEY, EquityOrder
from tdatrade.execution.validator import OrderValidationError, OrderValidator

log = logging.getLogger("preparer")


class OrderPreparer:
    """검증을 통과한 주문만 HTTP 계층으로 넘길 폼 파라미터로 만든다 (전송은 하지 않음)."""

    def __init__(self, validator: OrderValidator | None = None, key: str = DEFAULT_QUERY_KEY):
        self.validator = validator or OrderValidator()
        self.key = key

    def prepare(self, order: EquityOrder) -> dict[str, str]:
        self.validator.check(order)
        params = order.to_form_params(self.key)
        log.debug("Using %s: %s", self.key, params[self.key])
        return params

    def prepare_many(self, orders: list[EquityOrder]) -> list[dict[str, str]]:
        prepared = []
        for o in orders:
            try:
                prepared.append(self.prepare(o))
            except OrderValidationError:
                # 위반 내용은 validator가 이미 WARNING으로 남김
                continue
        log.info(f"Prepared {len(prepared)}/{len(orders)} orders")
        return prepared
