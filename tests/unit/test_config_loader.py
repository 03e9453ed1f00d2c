"""Layered configuration loading."""

import os

import yaml

from rolematch.core.config.loader import ConfigLoader


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))


def test_hierarchy(tmp_path, monkeypatch):
    _write(tmp_path / "default.yaml", {"fetcher": {"endpoint": "http://a", "timeout": 10}, "logging": {"level": "INFO"}})
    _write(tmp_path / "environments" / "staging.yaml", {"fetcher": {"endpoint": "http://b"}})
    monkeypatch.setenv("ROLEMATCH_ENV", "staging")
    monkeypatch.setenv("ROLEMATCH_FETCHER_TIMEOUT", "2.5")

    config = ConfigLoader(tmp_path).load(overrides={"logging": {"level": "DEBUG"}})

    assert config["fetcher"]["endpoint"] == "http://b"
    assert config["fetcher"]["timeout"] == 2.5
    assert config["logging"]["level"] == "DEBUG"


def test_env_values_are_typed(tmp_path, monkeypatch):
    _write(tmp_path / "default.yaml", {"proxy": {"port": 5000}})
    monkeypatch.setenv("ROLEMATCH_PROXY_PORT", "8080")
    monkeypatch.setenv("ROLEMATCH_PROXY_DEBUG", "false")
    monkeypatch.setenv("ROLEMATCH_PROXY_ORIGINS", "http://localhost:3000")

    proxy = ConfigLoader(tmp_path).load()["proxy"]

    assert proxy["port"] == 8080
    assert proxy["debug"] is False
    assert proxy["origins"] == "http://localhost:3000"


def test_missing_files_yield_empty_config(tmp_path, monkeypatch):
    for key in list(os.environ):
        if key.startswith("ROLEMATCH_"):
            monkeypatch.delenv(key)
    assert ConfigLoader(tmp_path / "nowhere").load() == {}


def test_shipped_defaults():
    config = ConfigLoader().load()
    assert config["fetcher"]["param"] == "roleId"
    assert config["proxy"]["param"] == "role_id"


def test_numeric_flags_stay_numbers(tmp_path, monkeypatch):
    monkeypatch.setenv("ROLEMATCH_FETCHER_TIMEOUT", "1")
    monkeypatch.setenv("ROLEMATCH_FETCHER_PARAM", "yes")

    fetcher = ConfigLoader(tmp_path).load()["fetcher"]

    assert fetcher["timeout"] == 1
    assert fetcher["timeout"] is not True
    assert fetcher["param"] is True
