"""コホートサンプラー

ユーザー識別子と機能キーから [0, 1) の安定した擬似乱数値（コホート値）を
求め、サンプルレートと比較する。

コホート値には SHA-1 hex ダイジェストの末尾 13 桁を使う。13 桁は IEEE-754
倍精度で誤差なく表せる最大整数 (2**53 - 1) に収まる hex 桁数であり、
同じコホートを共有する他サービスと判定結果を揃えるための出力契約の一部である。
"""

from __future__ import annotations

import hashlib

from .exceptions import FeatureGateError, FeatureGateErrorCodes

MAX_SAFE_INTEGER = 2**53 - 1

_MAX_SAFE_HEX = format(MAX_SAFE_INTEGER, "x")
COHORT_HEX_DIGITS = len(_MAX_SAFE_HEX) - _MAX_SAFE_HEX.index("f")
COHORT_DIVISOR = int("f" * COHORT_HEX_DIGITS, 16)
DIGEST_HEX_LENGTH = hashlib.sha1().digest_size * 2


def _digest(identity: str, feature_key: str) -> str:
    # 暗号強度は不要。速度と分布の良さだけが要件。
    h = hashlib.sha1()
    h.update(identity.encode("utf-8"))
    h.update(feature_key.encode("utf-8"))
    return h.hexdigest()


def _valid_rate(sample_rate: object) -> bool:
    # NaN は比較が常に False になるので範囲外として扱われる
    if isinstance(sample_rate, bool) or not isinstance(sample_rate, (int, float)):
        return False
    return 0.0 <= sample_rate <= 1.0


def cohort_value(identity_key: bytes | str, feature_key: str) -> float:
    """識別子と機能キーのコホート値 [0, 1) を返す。

    bytes の識別子はここで一度だけ小文字 hex 文字列に正規化する。
    """
    if isinstance(identity_key, (bytes, bytearray)):
        identity_key = identity_key.hex()
    tail = _digest(identity_key, feature_key)[DIGEST_HEX_LENGTH - COHORT_HEX_DIGITS :]
    return int(tail, 16) / COHORT_DIVISOR


def is_sampled(sample_rate: float, identity_key: bytes | str, feature_key: str) -> bool:
    """ユーザーがサンプル対象コホートに属するかを返す。

    Args:
        sample_rate: 0..1 のサンプルレート。1 は常に True、0 は常に False。
        identity_key: バイナリ uid またはその小文字 hex 文字列
        feature_key: 機能を識別するキー

    Raises:
        FeatureGateError: サンプルレートが範囲外、または機能キーが空の場合
    """
    if not _valid_rate(sample_rate):
        raise FeatureGateError(
            code=FeatureGateErrorCodes.INVALID_SAMPLE_RATE,
            message=f"Sample rate must be within [0, 1]: {sample_rate!r}",
        )
    if not feature_key:
        raise FeatureGateError(
            code=FeatureGateErrorCodes.INVALID_FEATURE_KEY,
            message="Feature key must not be empty",
        )

    if sample_rate == 1:
        return True
    if sample_rate == 0:
        return False

    return cohort_value(identity_key, feature_key) < sample_rate
