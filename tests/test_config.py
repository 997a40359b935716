"""
Test Configuration Module

This module tests settings loading including:
- Byte size parsing
- Port defaults and validation
- CORS origin parsing
- Immutability
"""

import dataclasses

import pytest

from app.shared.config import (
    ConfigurationError,
    Settings,
    load_settings,
    parse_bool,
    parse_byte_size,
    parse_origins,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("16kb", 16384),
        ("16KB", 16384),
        ("2 kb", 2048),
        ("1mb", 1024 * 1024),
        ("512", 512),
        ("512b", 512),
        ("1gb", 1024 ** 3),
        (100, 100),
    ],
)
def test_parse_byte_size(value, expected):
    assert parse_byte_size(value) == expected


@pytest.mark.parametrize("value", ["sixteen", "16tb", "", "-1kb", -5, True])
def test_parse_byte_size_rejects_garbage(value):
    with pytest.raises(ConfigurationError):
        parse_byte_size(value)


def test_defaults():
    """Test settings built from an empty environment"""
    settings = load_settings({})

    assert settings.port == 8000
    assert settings.host == "0.0.0.0"
    assert settings.cors_origins == ("*",)
    assert settings.cors_credentials is True
    assert settings.body_limit == "16kb"
    assert settings.body_limit_bytes == 16384
    assert settings.mongodb_uri == "mongodb://localhost:27017"
    assert settings.db_name == "backend"
    assert settings.log_level == "INFO"


def test_values_from_environment():
    settings = load_settings(
        {
            "PORT": "9000",
            "HOST": "127.0.0.1",
            "CORS_ORIGIN": "http://a.example.com, http://b.example.com/",
            "CORS_CREDENTIALS": "false",
            "MONGODB_URI": "mongodb+srv://cluster.example.net",
            "DB_NAME": "ClientDb",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.port == 9000
    assert settings.host == "127.0.0.1"
    assert settings.cors_origins == ("http://a.example.com", "http://b.example.com")
    assert settings.cors_credentials is False
    assert settings.mongodb_uri == "mongodb+srv://cluster.example.net"
    assert settings.db_name == "ClientDb"
    assert settings.log_level == "DEBUG"


def test_empty_port_falls_back_to_default():
    assert load_settings({"PORT": ""}).port == 8000


@pytest.mark.parametrize("port", ["abc", "0", "70000", "-1", "80.5"])
def test_invalid_port(port):
    with pytest.raises(ConfigurationError):
        load_settings({"PORT": port})


def test_invalid_boolean():
    with pytest.raises(ConfigurationError):
        parse_bool("maybe", True)


def test_parse_origins():
    assert parse_origins(None) == ("*",)
    assert parse_origins("") == ("*",)
    assert parse_origins(" , ") == ("*",)
    assert parse_origins("http://localhost:3000") == ("http://localhost:3000",)
    assert parse_origins("*") == ("*",)
    assert parse_origins("a, ,b") == ("a", "b")


def test_settings_are_frozen():
    settings = Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.port = 1


def test_reads_process_environment(monkeypatch):
    """Test loading from os.environ after .env handling"""
    loaded = []
    monkeypatch.setattr("app.shared.config.load_dotenv", lambda: loaded.append(True))
    monkeypatch.setenv("PORT", "8111")
    monkeypatch.setenv("CORS_ORIGIN", "http://localhost:5173")

    settings = load_settings()

    assert loaded == [True]
    assert settings.port == 8111
    assert settings.cors_origins == ("http://localhost:5173",)
