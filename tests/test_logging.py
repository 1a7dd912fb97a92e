"""Tests for logging helpers."""

from __future__ import annotations

from core.config import Settings
from core.logging import REDACTED, SecretRedactor, _parse_size, secret_redactor
from main import create_app


def test_redactor_masks_secret_values_and_key_fields() -> None:
    redactor = SecretRedactor(["s3cr3t"])

    event = redactor(
        None,
        "info",
        {
            "event": "Outgoing request",
            "url": "https://api.themoviedb.org/3/movie/popular?api_key=s3cr3t",
            "api_key": "anything",
            "status_code": 200,
        },
    )

    assert event["url"] == f"https://api.themoviedb.org/3/movie/popular?api_key={REDACTED}"
    assert event["api_key"] == REDACTED
    assert event["status_code"] == 200
    assert event["event"] == "Outgoing request"


def test_redactor_without_secrets_leaves_strings() -> None:
    event = SecretRedactor([""])(None, "info", {"event": "hello", "path": "/"})

    assert event == {"event": "hello", "path": "/"}


def test_parse_size() -> None:
    assert _parse_size("512") == 512
    assert _parse_size("4KB") == 4096
    assert _parse_size("10mb") == 10 * 1024 * 1024
    assert _parse_size("1GB") == 1024 ** 3


def test_redactor_add_ignores_empty_and_duplicates() -> None:
    redactor = SecretRedactor([])
    redactor.add(None)
    redactor.add("")
    redactor.add("k1")
    redactor.add("k1")

    assert redactor.secrets == ["k1"]


def test_app_key_is_redacted_for_explicit_settings() -> None:
    own_key = "explicit-app-key-52b0e4"

    create_app(Settings(_env_file=None, tmdb_api_key=own_key, metrics_enabled=False))
    event = secret_redactor(None, "error", {"event": "failed", "error": f"GET /3/movie/popular?api_key={own_key}"})

    assert own_key not in event["error"]
    assert REDACTED in event["error"]
