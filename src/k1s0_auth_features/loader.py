"""機能ゲート設定ファイル読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import FeatureGateError, FeatureGateErrorCodes
from .logger import get_logger
from .models import FeaturesConfig

logger = get_logger(__name__)


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FeatureGateError(
            code=FeatureGateErrorCodes.READ_FILE,
            message=f"Failed to read features config: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise FeatureGateError(
            code=FeatureGateErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise FeatureGateError(
            code=FeatureGateErrorCodes.PARSE_YAML,
            message=f"Top level of features config must be a mapping: {path}",
        )
    return data


def merge_overlay(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """環境別オーバーレイを base に重ねた新しい辞書を返す。

    ネストした機能セクションは再帰的にマージし、supported_clients などの
    リストは丸ごと置換する。
    """
    merged: dict[str, Any] = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_overlay(current, value)
        else:
            merged[key] = value
    return merged


def load(base_path: Path, env_path: Path | None = None) -> FeaturesConfig:
    """設定ファイルを読み込んで FeaturesConfig を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースにマージ。
    """
    data = _read_yaml(base_path)
    sources = [str(base_path)]
    if env_path is not None and env_path.exists():
        data = merge_overlay(data, _read_yaml(env_path))
        sources.append(str(env_path))
    try:
        config = FeaturesConfig.model_validate(data)
    except ValidationError as e:
        raise FeatureGateError(
            code=FeatureGateErrorCodes.VALIDATION,
            message=f"Features config validation failed: {e}",
            cause=e,
        ) from e
    logger.info("features config loaded", sources=sources)
    return config
