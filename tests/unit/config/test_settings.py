"""Unit tests for QuerySettings and EnvSettingsLoader."""

from __future__ import annotations

import dataclasses
from typing import ClassVar

import pytest

from qoptions.config import (
    EnvSettingsLoader,
    InvalidSettingValueError,
    QuerySettings,
    Settings,
)
from qoptions.kernel.errors import ConfigurationError


@dataclasses.dataclass(frozen=True)
class _ServiceSettings(Settings):
    _prefix: ClassVar[str] = "SVC"

    endpoint: str
    retries: int = 3


class TestQuerySettings:
    def test_defaults(self) -> None:
        s = QuerySettings()
        assert s.default_page_size == 10
        assert s.max_page_size == 0
        assert s.case_insensitive_search is True

    def test_zero_default_page_size_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            QuerySettings(default_page_size=0)

    def test_negative_max_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            QuerySettings(max_page_size=-1)

    def test_default_above_max_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            QuerySettings(default_page_size=50, max_page_size=20)

    def test_invalid_setting_is_configuration_error(self) -> None:
        assert issubclass(InvalidSettingValueError, ConfigurationError)

    def test_frozen(self) -> None:
        s = QuerySettings()
        with pytest.raises(Exception):
            s.default_page_size = 5  # type: ignore[misc]


class TestEnvSettingsLoader:
    def test_empty_environ_uses_defaults(self) -> None:
        s = EnvSettingsLoader({}).load(QuerySettings)
        assert s == QuerySettings()

    def test_reads_prefixed_keys(self) -> None:
        env = {
            "QOPTIONS_DEFAULT_PAGE_SIZE": "25",
            "QOPTIONS_MAX_PAGE_SIZE": "100",
            "QOPTIONS_CASE_INSENSITIVE_SEARCH": "off",
        }
        s = EnvSettingsLoader(env).load(QuerySettings)
        assert s.default_page_size == 25
        assert s.max_page_size == 100
        assert s.case_insensitive_search is False

    def test_bad_integer(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"QOPTIONS_DEFAULT_PAGE_SIZE": "ten"}).load(QuerySettings)

    def test_bad_boolean(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"QOPTIONS_CASE_INSENSITIVE_SEARCH": "maybe"}).load(QuerySettings)

    def test_validation_failure_propagates(self) -> None:
        with pytest.raises(ConfigurationError):
            EnvSettingsLoader({"QOPTIONS_DEFAULT_PAGE_SIZE": "0"}).load(QuerySettings)

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QOPTIONS_DEFAULT_PAGE_SIZE", "7")
        assert EnvSettingsLoader().load(QuerySettings).default_page_size == 7

    def test_required_field_read_from_environ(self) -> None:
        s = EnvSettingsLoader({"SVC_ENDPOINT": "db:5432"}).load(_ServiceSettings)
        assert s.endpoint == "db:5432"
        assert s.retries == 3

    def test_missing_required_field(self) -> None:
        with pytest.raises(ConfigurationError) as info:
            EnvSettingsLoader({"SVC_RETRIES": "5"}).load(_ServiceSettings)
        assert isinstance(info.value.cause, TypeError)
        assert "endpoint" in info.value.to_dict()["cause"]

    def test_invalid_value_detail(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader({"QOPTIONS_MAX_PAGE_SIZE": "lots"}).load(QuerySettings)
        assert info.value.detail["setting"] == "QOPTIONS_MAX_PAGE_SIZE"
        assert info.value.code == "invalid_setting_value"
