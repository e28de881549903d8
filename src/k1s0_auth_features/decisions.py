"""ゲート判定結果"""

from __future__ import annotations

from dataclasses import dataclass


class FeatureKeys:
    """機能キー定数。サンプリング対象の機能ではサンプラーのキーを兼ねる。"""

    LAST_ACCESS_TIME_UPDATES: str = "lastAccessTimeUpdates"
    SIGNIN_CONFIRMATION: str = "signinConfirmation"
    SIGNIN_UNBLOCK: str = "signinUnblock"
    SIGNIN_CONFIRMATION_BYPASS: str = "signinConfirmationBypass"


class GateReasons:
    """判定理由コード定数。"""

    FEATURE_DISABLED: str = "FEATURE_DISABLED"
    SUSPICIOUS_REQUEST: str = "SUSPICIOUS_REQUEST"
    FORCED_EMAIL: str = "FORCED_EMAIL"
    ALLOWED_EMAIL: str = "ALLOWED_EMAIL"
    ENABLED_EMAIL: str = "ENABLED_EMAIL"
    UNSUPPORTED_CLIENT: str = "UNSUPPORTED_CLIENT"
    SAMPLED: str = "SAMPLED"
    NOT_SAMPLED: str = "NOT_SAMPLED"
    FORCED_CONFIRMATION: str = "FORCED_CONFIRMATION"
    IP_PROFILING_DISABLED: str = "IP_PROFILING_DISABLED"
    NOT_VERIFIED: str = "NOT_VERIFIED"
    NOT_RECENT: str = "NOT_RECENT"
    VERIFIED_RECENTLY: str = "VERIFIED_RECENTLY"


@dataclass(frozen=True)
class GateDecision:
    """単一機能の判定結果。"""

    feature: str
    enabled: bool
    reason: str

    def __bool__(self) -> bool:
        return self.enabled


@dataclass(frozen=True)
class FeatureDecisions:
    """1 リクエストに対する 4 判定の結果。"""

    last_access_time_updates: bool
    signin_confirmation: bool
    signin_unblock: bool
    can_bypass_signin_confirmation: bool
