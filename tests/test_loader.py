"""設定ローダーのユニットテスト"""

from pathlib import Path

import pytest

from k1s0_auth_features.exceptions import FeatureGateError, FeatureGateErrorCodes
from k1s0_auth_features.loader import load, merge_overlay

BASE_YAML = """\
signinConfirmation:
  enabled: true
  sample_rate: 0.5
  forcedEmailAddresses: '.+@mozilla\\.com$'
  supportedClients: [iframe, fx_desktop_v3]
signinUnblock:
  enabled: false
securityHistory:
  enabled: true
  ipProfiling:
    enabled: true
"""


def test_load_minimal_config(tmp_path: Path) -> None:
    """最小設定ファイルの読み込み。"""
    config_file = tmp_path / "features.yaml"
    config_file.write_text("lastAccessTimeUpdates:\n  enabled: true\n")
    config = load(config_file)
    assert config.last_access_time_updates.enabled is True
    assert config.last_access_time_updates.sample_rate == 0.0
    assert config.signin_confirmation.enabled is False


def test_load_empty_file(tmp_path: Path) -> None:
    """空ファイルはデフォルト設定になること。"""
    config_file = tmp_path / "features.yaml"
    config_file.write_text("")
    config = load(config_file)
    assert config.security_history.enabled is False


def test_load_camel_case_keys(tmp_path: Path) -> None:
    """camelCase / snake_case 混在のキーを受け付けること。"""
    config_file = tmp_path / "features.yaml"
    config_file.write_text(BASE_YAML)
    config = load(config_file)
    confirmation = config.signin_confirmation
    assert confirmation.sample_rate == 0.5
    assert confirmation.supported_clients == ("iframe", "fx_desktop_v3")
    assert confirmation.forced_email_addresses is not None
    assert confirmation.forced_email_addresses.search("a@mozilla.com")
    assert config.security_history.ip_profiling.enabled is True


def test_load_with_env_override(tmp_path: Path) -> None:
    """環境別設定のマージ確認。リストは置換される。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text(BASE_YAML)
    env_file = tmp_path / "prod.yaml"
    env_file.write_text("signinConfirmation:\n  supportedClients: [iframe]\n  sample_rate: 0.1\n")
    config = load(base_file, env_file)
    assert config.signin_confirmation.enabled is True
    assert config.signin_confirmation.sample_rate == 0.1
    assert config.signin_confirmation.supported_clients == ("iframe",)


def test_load_env_not_exists(tmp_path: Path) -> None:
    """env_path が存在しない場合は base のみ使用。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text(BASE_YAML)
    config = load(base_file, tmp_path / "nonexistent.yaml")
    assert config.signin_confirmation.sample_rate == 0.5


def test_load_file_not_found(tmp_path: Path) -> None:
    """存在しないファイルで READ_FILE_ERROR。"""
    with pytest.raises(FeatureGateError) as exc_info:
        load(tmp_path / "missing.yaml")
    assert exc_info.value.code == FeatureGateErrorCodes.READ_FILE
    assert isinstance(exc_info.value.__cause__, OSError)


def test_load_invalid_yaml(tmp_path: Path) -> None:
    """不正 YAML で PARSE_YAML_ERROR。"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("signinUnblock: {invalid: yaml: content:\n")
    with pytest.raises(FeatureGateError) as exc_info:
        load(bad_file)
    assert exc_info.value.code == FeatureGateErrorCodes.PARSE_YAML


def test_load_non_mapping_yaml(tmp_path: Path) -> None:
    """トップレベルがマッピングでなければ PARSE_YAML_ERROR。"""
    bad_file = tmp_path / "list.yaml"
    bad_file.write_text("- a\n- b\n")
    with pytest.raises(FeatureGateError) as exc_info:
        load(bad_file)
    assert exc_info.value.code == FeatureGateErrorCodes.PARSE_YAML


def test_load_sample_rate_out_of_range(tmp_path: Path) -> None:
    """範囲外のサンプルレートで VALIDATION_ERROR。"""
    bad_config = tmp_path / "bad_rate.yaml"
    bad_config.write_text("signinUnblock:\n  sampleRate: 1.5\n")
    with pytest.raises(FeatureGateError) as exc_info:
        load(bad_config)
    assert exc_info.value.code == FeatureGateErrorCodes.VALIDATION


def test_load_invalid_regex(tmp_path: Path) -> None:
    """コンパイルできない正規表現で VALIDATION_ERROR。"""
    bad_config = tmp_path / "bad_regex.yaml"
    bad_config.write_text("signinUnblock:\n  allowedEmailAddresses: '(unclosed'\n")
    with pytest.raises(FeatureGateError) as exc_info:
        load(bad_config)
    assert exc_info.value.code == FeatureGateErrorCodes.VALIDATION


def test_merge_overlay_nested() -> None:
    base = {"signinUnblock": {"enabled": False, "sampleRate": 0.1}}
    result = merge_overlay(base, {"signinUnblock": {"enabled": True}})
    assert result == {"signinUnblock": {"enabled": True, "sampleRate": 0.1}}


def test_merge_overlay_does_not_mutate_base() -> None:
    """base が変更されないこと。"""
    base = {"signinUnblock": {"supportedClients": ["a"]}}
    merge_overlay(base, {"signinUnblock": {"supportedClients": ["b"]}})
    assert base["signinUnblock"]["supportedClients"] == ["a"]
