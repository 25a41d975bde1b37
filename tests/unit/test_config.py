"""Unit tests for Config loading and logging setup."""

import logging

import pytest

from deltaindex.config import Config, DeltaConfig, LoggingConfig, configure_logging
from deltaindex.domain.index.model.descriptor import DeltaKind


class TestConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DELTAINDEX_CONFIG_FILE", raising=False)
        config = Config()

        assert config.delta == DeltaConfig(enabled=True, column="delta")
        assert config.indexes == []

    def test_env_overrides_nested_values(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DELTAINDEX_DELTA__ENABLED", "false")
        monkeypatch.setenv("DELTAINDEX_REBUILD__URL", "http://indexer:9000")

        config = Config()

        assert config.delta.enabled is False
        assert config.rebuild.url == "http://indexer:9000"

    def test_yaml_file_declares_indexes(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        config_file = tmp_path / "deltaindex.yaml"
        config_file.write_text(
            """
delta:
  column: pending
indexes:
  - name: articles
    model: myapp.models:Article
    fields: [title, body]
    attributes:
      - name: view_count
        updatable: true
    delta: scheduled
"""
        )
        monkeypatch.setenv("DELTAINDEX_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.delta.column == "pending"
        (index,) = config.indexes
        descriptor = index.to_descriptor()
        assert descriptor.field_names() == ["title", "body"]
        assert descriptor.delta is DeltaKind.SCHEDULED
        assert descriptor.delta_attributes() == []

    def test_init_values_win_over_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DELTAINDEX_DELTA__COLUMN", "from_env")

        config = Config(delta=DeltaConfig(column="explicit"))

        assert config.delta.column == "explicit"


class TestConfigureLogging:
    def test_configures_root_logger(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DELTAINDEX_LOG_FILE", raising=False)
        root = logging.getLogger()
        saved_level, saved_handlers = root.level, root.handlers[:]
        try:
            configure_logging(LoggingConfig(level="WARNING"))

            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0], logging.StreamHandler)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_log_file_from_env(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        log_file = tmp_path / "logs" / "deltaindex.log"
        monkeypatch.setenv("DELTAINDEX_LOG_FILE", str(log_file))
        root = logging.getLogger()
        saved_level, saved_handlers = root.level, root.handlers[:]
        try:
            configure_logging(LoggingConfig(level="INFO"))

            assert isinstance(root.handlers[0], logging.FileHandler)
            assert log_file.parent.exists()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
