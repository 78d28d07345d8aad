"""Tests for config file loading."""

import json

import msgspec
import pytest

from grpcnav.config import AppConfig, ResolverConfig, load_config, override


def write_config(tmp_path, data) -> str:
    path = tmp_path / "grpcnav.json"
    path.write_text(json.dumps(data))
    return path


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        config = load_config(write_config(tmp_path, {}))
        assert config == AppConfig()
        assert config.resolver.stub_policy == "require"
        assert config.resolver.order == "name"
        assert config.resolver.fallback_suffixes == ("ImplBase", "CoroutineImplBase")

    def test_relative_index_paths(self, tmp_path):
        config = load_config(write_config(tmp_path, {
            "projects": [
                {"name": "rel", "index": "indexes/orders.json"},
                {"name": "abs", "index": "/data/users.json"},
            ],
        }))
        assert config.projects[0].index == str(tmp_path / "indexes" / "orders.json")
        assert config.projects[1].index == "/data/users.json"

    def test_resolver_section(self, tmp_path):
        config = load_config(write_config(tmp_path, {
            "resolver": {"stub_policy": "strip", "order": "index", "fallback_suffixes": ["ImplBase"]},
        }))
        assert config.resolver == ResolverConfig(stub_policy="strip", order="index", fallback_suffixes=("ImplBase",))

    def test_invalid_policy(self, tmp_path):
        with pytest.raises(msgspec.ValidationError):
            load_config(write_config(tmp_path, {"resolver": {"stub_policy": "sometimes"}}))

    def test_unknown_field(self, tmp_path):
        with pytest.raises(msgspec.ValidationError):
            load_config(write_config(tmp_path, {"resolver": {"policy": "strip"}}))

    def test_duplicate_project(self, tmp_path):
        with pytest.raises(ValueError, match="Duplicate"):
            load_config(write_config(tmp_path, {
                "projects": [{"name": "a", "index": "x.json"}, {"name": "a", "index": "y.json"}],
            }))

    def test_empty_project_fields(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, {"projects": [{"name": "", "index": "x.json"}]}))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")


class TestOverride:
    def test_none_values_ignored(self):
        config = ResolverConfig()
        assert override(config, stub_policy=None, order=None) is config

    def test_applies_changes(self):
        config = override(ResolverConfig(), stub_policy="strip")
        assert config.stub_policy == "strip"
        assert config.order == "name"

    def test_validates_values(self):
        with pytest.raises(msgspec.ValidationError):
            override(ResolverConfig(), order="random")
