# examples/build_order_example.py
# ------------------------------------------------------------
# 간단 실행 예시: GTC 지정가 매수 주문을 만들어 검증하고 주문 문자열 출력
# (전송은 하지 않음 - HTTP 계층이 'orderstring' 폼 필드로 붙여 보낸다)
# ------------------------------------------------------------
from tdatrade.execution.preparer import OrderPreparer
from tdatrade.execution.validator import OrderValidator
from tdatrade.models.order import EquityAction, EquityOrder, Expire, OrderType


def main():
    order = (
        EquityOrder.builder()
        .with_account_id("123456")
        .with_action(EquityAction.BUY)
        .with_order_type(OrderType.LIMIT)
        .with_price("250.10")
        .with_expire(Expire.GTC)
        .with_expire_day("15")
        .with_expire_month("11")
        .with_expire_year("26")
        .with_quantity(10)
        .with_symbol("msft")
        .build()
    )

    params = OrderPreparer(validator=OrderValidator(strict=True)).prepare(order)

    print("=== Equity Order ===")
    print(order)
    print(params["orderstring"])


if __name__ == "__main__":
    main()
