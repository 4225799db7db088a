"""Tests for ValidationConfig loading."""

import json
import logging

import pytest

from dataknobs_validator import (
    ConfigurationError,
    MessageCatalog,
    ValidationConfig,
    Validator,
    fixed_clock,
    logging_logger,
)
from dataknobs_validator.constraints import Min


class TestValidationConfig:
    """Test defaults and copies."""

    def test_defaults(self):
        config = ValidationConfig()
        assert config.fail_fast is False
        assert config.logger is None
        assert config.clock().tzinfo is not None
        assert "comparable.min" in config.catalog

    def test_replace(self, now):
        config = ValidationConfig().replace(fail_fast=True, clock=fixed_clock(now))
        assert config.fail_fast is True
        assert config.clock() == now


class TestFromDict:
    """Test dictionary loading."""

    def test_fail_fast_and_overrides(self):
        config = ValidationConfig.from_dict(
            {"fail_fast": True, "messages": {"comparable.min": "too small ({0})"}}
        )
        assert config.fail_fast is True
        result = Validator.of(Min(0)).try_validate(-1, config)
        assert result.messages[0].text == "too small (0)"
        assert config.catalog.lookup("comparable.max") == "must be less than or equal to {0}"

    def test_unknown_keys(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ValidationConfig.from_dict({"failfast": True})
        assert exc_info.value.context["unknown"] == ["failfast"]

    def test_invalid_fail_fast(self):
        with pytest.raises(ConfigurationError):
            ValidationConfig.from_dict({"fail_fast": "yes"})

    def test_messages_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            ValidationConfig.from_dict({"messages": ["a"]})

    def test_kwargs_pass_through(self, now):
        catalog = MessageCatalog({"comparable.min": "min {0}"})
        config = ValidationConfig.from_dict({}, clock=fixed_clock(now), catalog=catalog)
        assert config.clock() == now
        assert config.catalog is catalog


class TestFromFile:
    """Test file loading."""

    def test_yaml_with_relative_messages_file(self, tmp_path):
        (tmp_path / "messages.yaml").write_text('comparable.min: "at least {0}"\n', encoding="utf-8")
        (tmp_path / "validation.yaml").write_text(
            "fail_fast: true\nmessages_file: messages.yaml\n", encoding="utf-8"
        )
        config = ValidationConfig.from_file(tmp_path / "validation.yaml")
        assert config.fail_fast is True
        assert config.catalog.lookup("comparable.min") == "at least {0}"

    def test_json(self, tmp_path):
        path = tmp_path / "validation.json"
        path.write_text(json.dumps({"fail_fast": False}), encoding="utf-8")
        assert ValidationConfig.from_file(path).fail_fast is False

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert ValidationConfig.from_file(path).fail_fast is False

    def test_errors(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ValidationConfig.from_file(tmp_path / "missing.yaml")
        path = tmp_path / "validation.toml"
        path.write_text("fail_fast = true", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            ValidationConfig.from_file(path)


class TestFromEnv:
    """Test environment loading."""

    def test_fail_fast(self, monkeypatch):
        monkeypatch.setenv("DATAKNOBS_VALIDATOR_FAIL_FAST", "true")
        assert ValidationConfig.from_env().fail_fast is True

    def test_messages_file(self, monkeypatch, tmp_path):
        path = tmp_path / "messages.json"
        path.write_text(json.dumps({"comparable.min": "min {0}"}), encoding="utf-8")
        monkeypatch.setenv("APP_MESSAGES_FILE", str(path))
        config = ValidationConfig.from_env(prefix="APP_")
        assert config.catalog.lookup("comparable.min") == "min {0}"

    def test_unrelated_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("DATAKNOBS_VALIDATOR_OTHER", "1")
        monkeypatch.delenv("DATAKNOBS_VALIDATOR_FAIL_FAST", raising=False)
        assert ValidationConfig.from_env().fail_fast is False


class TestLoggingLogger:
    """Test the stdlib logging bridge."""

    def test_logs_trace_events(self, caplog):
        hook = logging_logger(logging.getLogger("validation.trace"))
        config = ValidationConfig(logger=hook)
        with caplog.at_level(logging.DEBUG, logger="validation.trace"):
            Validator.of(Min(0)).named("age").try_validate(-1, config)
        messages = [r.getMessage() for r in caplog.records if r.name == "validation.trace"]
        assert len(messages) == 1
        assert messages[0].startswith("Violated comparable.min at /age")
