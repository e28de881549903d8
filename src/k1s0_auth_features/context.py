"""評価コンテキスト"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Recency(str, Enum):
    """検証済みセキュリティイベントの新しさ区分。DAY が最も細かい。"""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class EvaluationContext:
    """リクエスト単位の評価入力。

    suspicious / verified / recency は呼び出し側が外部サービスから
    取得した値をそのまま渡す。
    """

    identity_key: bytes | str
    email: str
    suspicious: bool = False
    client_context: str | None = None
    verified: bool = False
    recency: Recency | str | None = None


def client_context_from_payload(payload: Mapping[str, Any] | None) -> str | None:
    """リクエストペイロードの metricsContext.context を取り出す。

    いずれかの階層が欠けている場合は None を返す。
    """
    if not isinstance(payload, Mapping):
        return None
    metrics_context = payload.get("metricsContext")
    if not isinstance(metrics_context, Mapping):
        return None
    return metrics_context.get("context")
