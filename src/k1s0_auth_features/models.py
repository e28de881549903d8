"""機能ゲート設定型定義（pydantic BaseModel）"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Section(BaseModel):
    """設定セクション共通の基底。

    YAML 上は snake_case / camelCase のどちらのキーも受け付ける。
    起動時に一度だけ読み込み、評価中は変更しない。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class LastAccessTimeUpdatesSection(_Section):
    """セッショントークン lastAccessTime 更新の設定。"""

    enabled: bool = False
    sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    enabled_email_addresses: re.Pattern[str] | None = None


class SigninConfirmationSection(_Section):
    """サインイン確認の設定。"""

    enabled: bool = False
    sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    forced_email_addresses: re.Pattern[str] | None = None
    supported_clients: tuple[str, ...] = ()


class SigninUnblockSection(_Section):
    """サインインブロック解除の設定。"""

    enabled: bool = False
    sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    forced_email_addresses: re.Pattern[str] | None = None
    allowed_email_addresses: re.Pattern[str] | None = None
    supported_clients: tuple[str, ...] = ()


class IpProfilingSection(_Section):
    """IP プロファイリング設定。"""

    enabled: bool = False


class SecurityHistorySection(_Section):
    """セキュリティ履歴トラッキング設定。"""

    enabled: bool = False
    ip_profiling: IpProfilingSection = Field(default_factory=IpProfilingSection)


class LogSection(_Section):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class FeaturesConfig(_Section):
    """機能ゲート設定全体。"""

    last_access_time_updates: LastAccessTimeUpdatesSection = Field(
        default_factory=LastAccessTimeUpdatesSection
    )
    signin_confirmation: SigninConfirmationSection = Field(
        default_factory=SigninConfirmationSection
    )
    signin_unblock: SigninUnblockSection = Field(default_factory=SigninUnblockSection)
    security_history: SecurityHistorySection = Field(
        default_factory=SecurityHistorySection
    )
    log: LogSection = Field(default_factory=LogSection)
