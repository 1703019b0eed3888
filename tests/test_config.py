"""Tests for configuration loading and validation."""

from dataclasses import replace

import pytest

from railcal.config import AppConfig, ApiConfig, BookingWindowConfig, _validate_config


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_default_window_is_ninety_days(self):
        assert BookingWindowConfig().window_days == 90

    def test_gateway_url_must_be_http(self):
        config = replace(AppConfig(), api=replace(ApiConfig(), gateway_url="ftp://gateway"))
        with pytest.raises(ValueError, match="API_GATEWAY_URL"):
            _validate_config(config)

    def test_timeout_must_be_positive(self):
        config = replace(AppConfig(), api=replace(ApiConfig(), request_timeout_sec=0))
        with pytest.raises(ValueError, match="REQUEST_TIMEOUT_SEC"):
            _validate_config(config)

    def test_concurrency_at_least_one(self):
        config = replace(AppConfig(), api=replace(ApiConfig(), max_concurrent_requests=0))
        with pytest.raises(ValueError, match="MAX_CONCURRENT_REQUESTS"):
            _validate_config(config)

    def test_window_at_least_one_day(self):
        config = replace(AppConfig(), window=BookingWindowConfig(window_days=0))
        with pytest.raises(ValueError, match="BOOKING_WINDOW_DAYS"):
            _validate_config(config)

    def test_safe_int_parsing(self):
        from railcal.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_rejects_garbage(self, monkeypatch):
        from railcal.config import _safe_int

        monkeypatch.setenv("RAILCAL_TEST_INT", "ninety")
        with pytest.raises(ValueError, match="RAILCAL_TEST_INT"):
            _safe_int("RAILCAL_TEST_INT", "90")

    def test_safe_float_parsing(self):
        from railcal.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "2.5") == pytest.approx(2.5)

    def test_safe_float_rejects_garbage(self, monkeypatch):
        from railcal.config import _safe_float

        monkeypatch.setenv("RAILCAL_TEST_FLOAT", "soon")
        with pytest.raises(ValueError, match="RAILCAL_TEST_FLOAT"):
            _safe_float("RAILCAL_TEST_FLOAT", "10.0")

    def test_optional_str_blank_is_none(self, monkeypatch):
        from railcal.config import _optional_str

        monkeypatch.setenv("RAILCAL_TEST_TOKEN", "   ")
        assert _optional_str("RAILCAL_TEST_TOKEN") is None
        monkeypatch.setenv("RAILCAL_TEST_TOKEN", " abc ")
        assert _optional_str("RAILCAL_TEST_TOKEN") == "abc"
