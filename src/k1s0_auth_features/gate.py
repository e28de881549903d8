"""FeatureGate — 認証機能のゲート判定"""

from __future__ import annotations

import re

import structlog

from .context import EvaluationContext, Recency
from .decisions import FeatureDecisions, FeatureKeys, GateDecision, GateReasons
from .logger import get_logger
from .models import FeaturesConfig
from .sampler import is_sampled

_logger = get_logger(__name__)


def _matches(pattern: re.Pattern[str] | None, email: str) -> bool:
    # 未設定のパターンは何にもマッチしない
    return pattern is not None and pattern.search(email) is not None


class FeatureGate:
    """ユーザー・リクエスト単位で認証機能を適用するか判定する。

    各判定は固定の優先順位で上書き条件を評価し、最後にサンプラーを参照する。
    設定は読み取り専用のため、インスタンスは並行リクエスト間で共有できる。
    logger を省略すると stdlib ロガーに流れるため、出力先とレベルは
    configure_logging またはホスト側の logging 設定で決まる。
    """

    def __init__(
        self,
        config: FeaturesConfig,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger if logger is not None else _logger
        self._logger.info(
            "feature gate configured",
            last_access_time_updates=config.last_access_time_updates.enabled,
            signin_confirmation=config.signin_confirmation.enabled,
            signin_unblock=config.signin_unblock.enabled,
            security_history=config.security_history.enabled,
        )

    @property
    def config(self) -> FeaturesConfig:
        return self._config

    def _decide(self, feature: str, enabled: bool, reason: str) -> GateDecision:
        self._logger.debug("feature gate evaluated", feature=feature, enabled=enabled, reason=reason)
        return GateDecision(feature=feature, enabled=enabled, reason=reason)

    def _sample(self, feature: str, sample_rate: float, identity_key: bytes | str) -> GateDecision:
        if is_sampled(sample_rate, identity_key, feature):
            return self._decide(feature, True, GateReasons.SAMPLED)
        return self._decide(feature, False, GateReasons.NOT_SAMPLED)

    def is_sampled_user(
        self, sample_rate: float, identity_key: bytes | str, feature_key: str
    ) -> bool:
        """ユーザーがサンプル対象コホートに属するかを返す。"""
        return is_sampled(sample_rate, identity_key, feature_key)

    def evaluate_last_access_time(self, identity_key: bytes | str, email: str) -> GateDecision:
        """lastAccessTime 更新の判定。サンプリングとメールパターンはどちらか一方で有効。"""
        feature = FeatureKeys.LAST_ACCESS_TIME_UPDATES
        section = self._config.last_access_time_updates
        if not section.enabled:
            return self._decide(feature, False, GateReasons.FEATURE_DISABLED)
        if is_sampled(section.sample_rate, identity_key, feature):
            return self._decide(feature, True, GateReasons.SAMPLED)
        if _matches(section.enabled_email_addresses, email):
            return self._decide(feature, True, GateReasons.ENABLED_EMAIL)
        return self._decide(feature, False, GateReasons.NOT_SAMPLED)

    def is_last_access_time_enabled_for_user(self, identity_key: bytes | str, email: str) -> bool:
        return self.evaluate_last_access_time(identity_key, email).enabled

    def evaluate_signin_confirmation(
        self,
        identity_key: bytes | str,
        email: str,
        suspicious: bool,
        client_context: str | None,
    ) -> GateDecision:
        """サインイン確認の判定。"""
        feature = FeatureKeys.SIGNIN_CONFIRMATION
        section = self._config.signin_confirmation
        if not section.enabled:
            return self._decide(feature, False, GateReasons.FEATURE_DISABLED)
        # 不審リクエストは常に確認を要求する
        if suspicious:
            return self._decide(feature, True, GateReasons.SUSPICIOUS_REQUEST)
        if _matches(section.forced_email_addresses, email):
            return self._decide(feature, True, GateReasons.FORCED_EMAIL)
        if client_context not in section.supported_clients:
            return self._decide(feature, False, GateReasons.UNSUPPORTED_CLIENT)
        return self._sample(feature, section.sample_rate, identity_key)

    def is_signin_confirmation_enabled_for_user(
        self,
        identity_key: bytes | str,
        email: str,
        suspicious: bool,
        client_context: str | None,
    ) -> bool:
        return self.evaluate_signin_confirmation(
            identity_key, email, suspicious, client_context
        ).enabled

    def evaluate_signin_unblock(
        self, identity_key: bytes | str, email: str, client_context: str | None
    ) -> GateDecision:
        """サインインブロック解除の判定。"""
        feature = FeatureKeys.SIGNIN_UNBLOCK
        section = self._config.signin_unblock
        if not section.enabled:
            return self._decide(feature, False, GateReasons.FEATURE_DISABLED)
        if _matches(section.forced_email_addresses, email):
            return self._decide(feature, True, GateReasons.FORCED_EMAIL)
        if _matches(section.allowed_email_addresses, email):
            return self._decide(feature, True, GateReasons.ALLOWED_EMAIL)
        if client_context not in section.supported_clients:
            return self._decide(feature, False, GateReasons.UNSUPPORTED_CLIENT)
        return self._sample(feature, section.sample_rate, identity_key)

    def is_signin_unblock_enabled_for_user(
        self, identity_key: bytes | str, email: str, client_context: str | None
    ) -> bool:
        return self.evaluate_signin_unblock(identity_key, email, client_context).enabled

    def evaluate_signin_confirmation_bypass(
        self, email: str, verified: bool, recency: Recency | str | None
    ) -> GateDecision:
        """サインイン確認を省略できるかの判定。

        強制確認対象のメールは省略できない。それ以外は IP プロファイリングが
        有効で、直近 1 日以内に検証済みイベントがある場合に限り省略する。
        """
        feature = FeatureKeys.SIGNIN_CONFIRMATION_BYPASS
        confirmation = self._config.signin_confirmation
        if confirmation.enabled and _matches(confirmation.forced_email_addresses, email):
            return self._decide(feature, False, GateReasons.FORCED_CONFIRMATION)

        history = self._config.security_history
        if not (history.enabled and history.ip_profiling.enabled):
            return self._decide(feature, False, GateReasons.IP_PROFILING_DISABLED)
        if not verified:
            return self._decide(feature, False, GateReasons.NOT_VERIFIED)
        if recency != Recency.DAY:
            return self._decide(feature, False, GateReasons.NOT_RECENT)
        return self._decide(feature, True, GateReasons.VERIFIED_RECENTLY)

    def can_bypass_signin_confirmation(
        self, email: str, verified: bool, recency: Recency | str | None
    ) -> bool:
        return self.evaluate_signin_confirmation_bypass(email, verified, recency).enabled

    def evaluate(self, context: EvaluationContext) -> FeatureDecisions:
        """1 リクエスト分の評価コンテキストから 4 判定をまとめて返す。"""
        return FeatureDecisions(
            last_access_time_updates=self.is_last_access_time_enabled_for_user(
                context.identity_key, context.email
            ),
            signin_confirmation=self.is_signin_confirmation_enabled_for_user(
                context.identity_key,
                context.email,
                context.suspicious,
                context.client_context,
            ),
            signin_unblock=self.is_signin_unblock_enabled_for_user(
                context.identity_key, context.email, context.client_context
            ),
            can_bypass_signin_confirmation=self.can_bypass_signin_confirmation(
                context.email, context.verified, context.recency
            ),
        )
