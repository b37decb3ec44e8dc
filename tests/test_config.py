# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for the configuration repository, settings and logging setup."""

import logging

import pytest
import structlog
from pydantic import ValidationError

from responder import configure_logging
from responder.config import ConfigRepository, ResponderSettings, get_settings


class TestConfigRepository:
    """Tests for dotted-key access."""

    def test_get_nested(self):
        config = ConfigRepository({"responder": {"serializers": {"error": "error"}}})
        assert config.get("responder.serializers.error") == "error"

    def test_get_missing_returns_default(self):
        config = ConfigRepository({"responder": {"decorators": []}})
        assert config.get("responder.nope") is None
        assert config.get("responder.decorators.deeper", "fallback") == "fallback"

    def test_has(self):
        config = ConfigRepository({"responder": {"decorators": None}})
        assert config.has("responder.decorators")
        assert not config.has("responder.serializers")

    def test_set_creates_namespaces(self):
        config = ConfigRepository()
        config.set("responder.serializers.success", "noop")
        assert config.all() == {"responder": {"serializers": {"success": "noop"}}}

    def test_items_are_copied(self):
        items = {"responder": {"decorators": ["log"]}}
        config = ConfigRepository(items)
        config.get("responder.decorators").append("pretty_print")
        assert items == {"responder": {"decorators": ["log"]}}

    def test_merge_keeps_existing_values(self):
        config = ConfigRepository({"responder": {"recursion_limit": 2, "serializers": {"success": "noop"}}})
        config.merge("responder", {
            "recursion_limit": 5,
            "decorators": ["status_code"],
            "serializers": {"success": "success", "error": "error"},
        })
        assert config.get("responder") == {
            "recursion_limit": 2,
            "decorators": ["status_code"],
            "serializers": {"success": "noop", "error": "error"},
        }

    def test_merge_into_missing_namespace(self):
        config = ConfigRepository()
        config.merge("responder", {"recursion_limit": 5})
        assert config.get("responder.recursion_limit") == 5


class TestConfigure:
    """Tests for loading ``<name>.yaml``."""

    def test_missing_file(self, tmp_path):
        config = ConfigRepository(config_dir=tmp_path)
        assert config.configure("responder") is False
        assert config.all() == {}

    def test_loads_yaml(self, tmp_path):
        (tmp_path / "responder.yaml").write_text(
            "decorators:\n  - log\nserializers:\n  success: noop\n"
        )
        config = ConfigRepository(config_dir=tmp_path)

        assert config.configure("responder") is True
        assert config.get("responder.decorators") == ["log"]
        assert config.get("responder.serializers.success") == "noop"

    def test_programmatic_values_win(self, tmp_path):
        (tmp_path / "responder.yaml").write_text("recursion_limit: 3\nfilter_fields_parameter: fields\n")
        config = ConfigRepository({"responder": {"recursion_limit": 9}}, config_dir=tmp_path)

        config.configure("responder")
        assert config.get("responder.recursion_limit") == 9
        assert config.get("responder.filter_fields_parameter") == "fields"

    def test_empty_file(self, tmp_path):
        (tmp_path / "responder.yaml").write_text("")
        config = ConfigRepository(config_dir=tmp_path)
        assert config.configure("responder") is True
        assert config.all() == {}

    def test_non_mapping_rejected(self, tmp_path):
        (tmp_path / "responder.yaml").write_text("- just\n- a list\n")
        config = ConfigRepository(config_dir=tmp_path)
        with pytest.raises(ValueError):
            config.configure("responder")


class TestResponderSettings:
    def test_defaults(self):
        settings = ResponderSettings()
        assert settings.decorators == ["status_code", "success_flag"]
        assert settings.serializers.error == "error"
        assert settings.serializers.success == "success"
        assert settings.recursion_limit == 5
        assert settings.load_relations_parameter == "with"
        assert settings.filter_fields_parameter == "only"

    def test_namespace_keys(self):
        assert set(ResponderSettings().namespace()) == {
            "decorators",
            "serializers",
            "recursion_limit",
            "load_relations_parameter",
            "filter_fields_parameter",
            "error_messages",
        }

    def test_env_nested_override(self, monkeypatch):
        monkeypatch.setenv("RESPONDER_SERIALIZERS__SUCCESS", "noop")
        assert get_settings().serializers.success == "noop"

    def test_decorator_classes_accepted(self):
        class Marker:
            pass

        settings = ResponderSettings(decorators=["log", Marker])
        assert settings.decorators == ["log", Marker]

    @pytest.mark.parametrize("limit", [0, 51])
    def test_recursion_limit_range(self, limit):
        with pytest.raises(ValidationError):
            ResponderSettings(recursion_limit=limit)

    def test_log_level_normalized(self):
        assert ResponderSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            ResponderSettings(log_level="verbose")

    def test_parameter_names_stripped(self):
        assert ResponderSettings(load_relations_parameter=" include ").load_relations_parameter == "include"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        level, handlers = root.level, list(root.handlers)
        yield
        structlog.reset_defaults()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_sets_root_level(self):
        configure_logging(log_level="WARNING", log_format="text")
        assert logging.getLogger().level == logging.WARNING

    def test_json_renderer(self):
        configure_logging(log_level="INFO", log_format="json")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
