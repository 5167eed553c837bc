"""
Settings parsing from the environment.
"""
import pytest

from safespace.core.config import Settings


def test_cors_origins_accepts_comma_separated_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    s = Settings()
    assert s.cors_origin_list == ["http://a.example", "http://b.example"]


def test_cors_origins_wildcard(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "*")
    assert Settings().cors_origin_list == ["*"]


def test_storage_backend_is_normalised(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", " SQL ")
    assert Settings().storage_backend == "sql"


def test_unknown_storage_backend_is_rejected(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    with pytest.raises(ValueError):
        Settings()


def test_debug_accepts_loose_booleans(monkeypatch):
    monkeypatch.setenv("DEBUG", "yes")
    assert Settings().debug is True
