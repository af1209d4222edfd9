from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from mjtools.schemas import RuleConfig


class Settings(BaseSettings):
    partition_table_path: Path | None = None
    log_level: str = "WARNING"

    # default rule set used when a caller does not pass one
    kuitan: bool = True
    kokushi13_as_double: bool = True
    suuankou_tanki_as_double: bool = True
    ba1500: bool = False
    mangan_roundup: bool = False
    nagashi_mangan: bool = True

    model_config = SettingsConfigDict(env_prefix="MJTOOLS_", env_file=".env", env_file_encoding="utf-8")

    def rule_config(self) -> RuleConfig:
        return RuleConfig(
            kuitan=self.kuitan,
            kokushi13_as_double=self.kokushi13_as_double,
            suuankou_tanki_as_double=self.suuankou_tanki_as_double,
            ba1500=self.ba1500,
            mangan_roundup=self.mangan_roundup,
            nagashi_mangan=self.nagashi_mangan,
        )


settings = Settings()
