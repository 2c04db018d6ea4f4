"""Tests for provider API key storage."""

import json
import stat

import pytest

from model_playground.core.credentials import (
    JsonFileCredentialStore,
    MemoryCredentialStore,
    mask_credential,
)


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryCredentialStore()
    return JsonFileCredentialStore(tmp_path / "creds" / "credentials.json")


def test_absent_until_set(store):
    assert store.get("openai") is None
    assert not store.has("openai")


@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
def test_blank_values_are_never_persisted(store, blank):
    assert store.set("openai", blank) is False
    assert store.get("openai") is None


def test_blank_value_does_not_clobber_existing_key(store):
    store.set("openai", "sk-real")
    store.set("openai", "  ")
    assert store.get("openai") == "sk-real"


def test_set_trims_and_overwrites(store):
    assert store.set("anthropic", "  sk-ant-one  ") is True
    assert store.get("anthropic") == "sk-ant-one"
    store.set("anthropic", "sk-ant-two")
    assert store.get("anthropic") == "sk-ant-two"


def test_keys_are_per_provider(store):
    store.set("openai", "sk-openai")
    assert store.get("anthropic") is None


def test_file_store_survives_new_instance(tmp_path):
    path = tmp_path / "credentials.json"
    JsonFileCredentialStore(path).set("google", "AIza-123")

    assert JsonFileCredentialStore(path).get("google") == "AIza-123"
    assert json.loads(path.read_text(encoding="utf-8")) == {"credentials": {"google": "AIza-123"}}
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_file_store_moves_malformed_file_aside(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileCredentialStore(path)

    assert store.get("openai") is None
    store.set("openai", "sk-new")
    assert store.get("openai") == "sk-new"
    assert path.with_name("credentials.json.corrupt").read_text(encoding="utf-8") == "{not json"


def test_file_store_keeps_valid_keys_when_an_entry_is_invalid(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(
        json.dumps({"credentials": {"openai": "sk-keep-me", "cohere": None}}),
        encoding="utf-8",
    )
    store = JsonFileCredentialStore(path)

    assert store.get("openai") == "sk-keep-me"
    assert store.get("cohere") is None
    assert store.set("anthropic", "sk-ant") is True

    assert store.get("openai") == "sk-keep-me"
    assert store.get("anthropic") == "sk-ant"
    assert not list(tmp_path.glob(".credentials_*.tmp"))


def test_file_store_accepts_flat_document(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"mistral": "m-key"}), encoding="utf-8")
    assert JsonFileCredentialStore(path).get("mistral") == "m-key"


def test_mask_credential():
    assert mask_credential(None) == "not set"
    assert mask_credential("short") == "***"
    assert mask_credential("sk-abcdefghijkl") == "sk-a…kl"
