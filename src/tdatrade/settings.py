# src/tdatrade/settings.py
from pathlib import Path
import os

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from tdatrade.models.order import DEFAULT_QUERY_KEY, Routing, SpecialInstruction


class AccountCfg(BaseModel):
    default_id: str | None = None


class OrderCfg(BaseModel):
    routing: Routing = Routing.AUTO
    special_instruction: SpecialInstruction = SpecialInstruction.NONE
    query_key: str = DEFAULT_QUERY_KEY
    strict: bool = False


class Settings(BaseSettings):
    env: str = "dev"
    account: AccountCfg = AccountCfg()
    order: OrderCfg = OrderCfg()

    # .env 자동 로드, 모르는 키는 무시, ACCOUNT__DEFAULT_ID 같은 중첩 키 지원
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, path: str | None = None):
        cfg: dict = {}
        if path and Path(path).exists():
            with open(path, "r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}

        # 환경변수 오버레이: TDA_ACCOUNT_ID → account.default_id
        acct = os.getenv("TDA_ACCOUNT_ID")
        if acct:
            cfg.setdefault("account", {})
            cfg["account"]["default_id"] = acct

        return cls.model_validate(cfg)
