"""Tests for configuration, settings and result models."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from restartable.core.config import RestartConfig
from restartable.core.exceptions import RestartTimeoutError
from restartable.core.models.metrics import Metrics, Success
from restartable.core.models.outcome import Rejected
from restartable.core.settings import RestartableSettings


class TestRestartConfig:
    """Deadline validation."""

    def test_seconds_coerced_to_timedelta(self):
        assert RestartConfig(deadline=1.5).deadline == timedelta(seconds=1.5)

    def test_zero_deadline_allowed(self):
        assert RestartConfig(deadline=0).deadline == timedelta(0)

    def test_negative_deadline_rejected(self):
        with pytest.raises(ValidationError):
            RestartConfig(deadline=timedelta(seconds=-0.1))

    def test_deadline_is_mandatory(self):
        with pytest.raises(ValidationError):
            RestartConfig()

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            RestartConfig(deadline=1, max_attempts=3)

    def test_frozen(self):
        config = RestartConfig(deadline=1)
        with pytest.raises(ValidationError):
            config.deadline = timedelta(seconds=2)

    def test_cancel_grace_defaults_and_validation(self):
        assert RestartConfig(deadline=1).cancel_grace == timedelta(milliseconds=10)
        assert RestartConfig(deadline=1, cancel_grace=0).cancel_grace == timedelta(0)
        with pytest.raises(ValidationError):
            RestartConfig(deadline=1, cancel_grace=-0.5)

    def test_from_app_settings(self):
        settings = RestartableSettings(RESTARTABLE_DEFAULT_DEADLINE=2.5)

        assert RestartConfig.from_app_settings(settings).deadline == timedelta(seconds=2.5)


class TestRestartableSettings:
    """Environment-driven settings."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RESTARTABLE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("RESTARTABLE_DEFAULT_DEADLINE", "0.75")

        settings = RestartableSettings()

        assert settings.RESTARTABLE_LOG_LEVEL == "DEBUG"
        assert settings.RESTARTABLE_DEFAULT_DEADLINE == 0.75

    def test_negative_default_deadline_rejected(self, monkeypatch):
        monkeypatch.setenv("RESTARTABLE_DEFAULT_DEADLINE", "-1")

        with pytest.raises(ValidationError):
            RestartableSettings()


class TestModels:
    """Metrics, Success and the timeout error payload."""

    def test_metrics_defaults_and_seconds(self):
        metrics = Metrics(elapsed=timedelta(milliseconds=400))

        assert metrics.restart_count == 0
        assert metrics.elapsed_seconds == pytest.approx(0.4)

    def test_metrics_reject_negative_values(self):
        with pytest.raises(ValidationError):
            Metrics(elapsed=timedelta(0), restart_count=-1)
        with pytest.raises(ValidationError):
            Metrics(elapsed=timedelta(seconds=-1))

    def test_success_exposes_metrics(self):
        success = Success(
            value="payload",
            metrics=Metrics(elapsed=timedelta(seconds=1), restart_count=3),
        )

        assert success.restart_count == 3
        assert success.elapsed == timedelta(seconds=1)

    def test_timeout_error_carries_partial_metrics(self):
        metrics = Metrics(elapsed=timedelta(seconds=0.5), restart_count=4)
        err = RestartTimeoutError(
            metrics, timedelta(seconds=0.5), last_rejection=Rejected(reason="503")
        )

        assert err.restart_count == 4
        assert err.elapsed == timedelta(seconds=0.5)
        assert err.diagnostic == "last rejection: '503'"
        assert str(err) == "No accepted value after 4 restart(s); 0.500s elapsed (limit: 0.5s)"
