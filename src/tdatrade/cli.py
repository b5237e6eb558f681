from decimal import InvalidOperation
from typing import Optional

import typer

from tdatrade.execution.preparer import OrderPreparer
from tdatrade.execution.validator import OrderValidationError, OrderValidator
from tdatrade.logging_config import setup as setup_logging
from tdatrade.models.order import (
    EquityAction,
    EquityOrder,
    Expire,
    OrderType,
    Routing,
    SpecialInstruction,
)
from tdatrade.settings import Settings


app = typer.Typer(help="TDA equity order CLI")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="콘솔/파일 로깅 켜기"),
    log_dir: str = typer.Option("logs", help="로그 파일 디렉터리"),
) -> None:
    if verbose:
        setup_logging(log_dir=log_dir)


@app.command()
def order(
    symbol: str = typer.Option(..., help="예: MSFT (소문자도 자동 변환)"),
    action: Optional[EquityAction] = typer.Option(None, help="buy/sell/sellshort/buytocover"),
    order_type: Optional[OrderType] = typer.Option(None, "--order-type", help="market/limit/..."),
    expire: Optional[Expire] = typer.Option(None, help="day/moc/day_ext/gtc/gtc_ext/am/pm"),
    quantity: Optional[int] = typer.Option(None, help="주식 수량 (1 이상)"),
    account_id: Optional[str] = typer.Option(None, help="미지정 시 설정의 account.default_id"),
    price: Optional[str] = typer.Option(None, help="limit price"),
    act_price: Optional[str] = typer.Option(None, help="stop price"),
    ts_param: Optional[str] = typer.Option(None, help="trailing stop (percent 또는 dollar)"),
    display_size: Optional[int] = typer.Option(None, help="100 단위, 100 이상"),
    expire_day: Optional[str] = typer.Option(None, help="gtc 전용, 두 자리"),
    expire_month: Optional[str] = typer.Option(None, help="gtc 전용, 두 자리"),
    expire_year: Optional[str] = typer.Option(None, help="gtc 전용, 두 자리"),
    routing: Optional[Routing] = typer.Option(None, help="미지정 시 설정값(auto)"),
    special_instruction: Optional[SpecialInstruction] = typer.Option(None, help="미지정 시 설정값(none)"),
    client_order_id: Optional[str] = typer.Option(None),
    config: Optional[str] = typer.Option(None, help="YAML 설정 파일"),
    strict: Optional[bool] = typer.Option(None, "--strict/--no-strict", help="교차 필드 검증"),
    form: bool = typer.Option(False, "--form/--no-form", help="key=<주문문자열> 형태로 출력"),
) -> None:
    """
    주문을 만들고 검증한 뒤 '~' 구분 주문 문자열을 출력한다 (전송 X).
    """
    s = Settings.load(config)
    try:
        eq = (
            EquityOrder.builder()
            .with_account_id(account_id or s.account.default_id)
            .with_action(action)
            .with_order_type(order_type)
            .with_expire(expire)
            .with_quantity(quantity)
            .with_symbol(symbol)
            .with_price(price)
            .with_act_price(act_price)
            .with_ts_param(ts_param)
            .with_display_size(display_size)
            .with_expire_day(expire_day)
            .with_expire_month(expire_month)
            .with_expire_year(expire_year)
            .with_routing(routing or s.order.routing)
            .with_special_instruction(special_instruction or s.order.special_instruction)
            .with_client_order_id(client_order_id)
            .build()
        )
    except (ValueError, InvalidOperation) as e:
        typer.echo(f"Invalid order: {e}", err=True)
        raise typer.Exit(code=1)

    validator = OrderValidator(strict=s.order.strict if strict is None else strict)
    preparer = OrderPreparer(validator=validator, key=s.order.query_key)
    try:
        params = preparer.prepare(eq)
    except OrderValidationError as e:
        for v in e.violations:
            typer.echo(f"{v.field}: {v.message}", err=True)
        raise typer.Exit(code=1)

    if form:
        typer.echo(f"{preparer.key}={params[preparer.key]}")
    else:
        typer.echo(params[preparer.key])


@app.command()
def choices():
    for enum_cls in (EquityAction, Expire, OrderType, Routing, SpecialInstruction):
        print(f"{enum_cls.__name__}: {', '.join(m.value for m in enum_cls)}")


if __name__ == "__main__":
    app()
