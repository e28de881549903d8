"""auth-features ライブラリの例外型定義"""

from __future__ import annotations


class FeatureGateError(Exception):
    """auth-features ライブラリのエラー基底クラス。

    設定不備やサンプラーの事前条件違反を表す。リクエスト処理中に
    回復するものではなく、運用側の設定ミスとして扱う。
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class FeatureGateErrorCodes:
    """FeatureGateError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    INVALID_SAMPLE_RATE: str = "INVALID_SAMPLE_RATE"
    INVALID_FEATURE_KEY: str = "INVALID_FEATURE_KEY"
