"""Tests for credential stores and keychain helpers"""

import pytest
from unittest.mock import patch

import keyring.errors

from roteiro.secrets import (
    KNOWN_KEYS,
    EnvCredentialStore,
    KeyringCredentialStore,
    MemoryCredentialStore,
    env_var_name,
    get_api_key,
    import_from_env_file,
    list_api_keys,
    set_api_key,
)


class TestMemoryCredentialStore:

    def test_get_and_set(self):
        store = MemoryCredentialStore()
        store.set("gemini_api_key", "  abc  ")

        assert store.get("gemini_api_key") == "abc"
        assert store.get("openai_api_key") is None

    def test_empty_value_reads_as_absent(self):
        assert MemoryCredentialStore({"gemini_api_key": ""}).get("gemini_api_key") is None

    def test_repr_masks_secrets(self):
        store = MemoryCredentialStore({"openai_api_key": "sk-1234567890abcdef"})

        assert "1234567890" not in repr(store)
        assert "sk-1...cdef" in repr(store)


class TestEnvCredentialStore:

    def test_reads_upper_cased_slot(self, monkeypatch):
        monkeypatch.setenv("LEONARDO_API_KEY", "leo")

        assert EnvCredentialStore().get("leonardo_api_key") == "leo"

    def test_missing(self, monkeypatch):
        monkeypatch.delenv("GROK_API_KEY", raising=False)

        assert EnvCredentialStore().get("grok_api_key") is None

    def test_env_var_name(self):
        assert env_var_name("elevenlabs_api_key") == "ELEVENLABS_API_KEY"


class TestKeyringHelpers:

    def test_keychain_first(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        with patch("roteiro.secrets.keyring.get_password", return_value="from-keychain"):
            assert get_api_key("openai_api_key") == "from-keychain"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        with patch("roteiro.secrets.keyring.get_password", side_effect=keyring.errors.KeyringError("locked")):
            assert get_api_key("openai_api_key") == "from-env"
            assert get_api_key("openai_api_key", fallback_to_env=False) is None

    def test_set_failure_returns_false(self):
        with patch("roteiro.secrets.keyring.set_password", side_effect=keyring.errors.PasswordSetError("no")):
            assert set_api_key("openai_api_key", "k") is False

    def test_keyring_store_set_raises_on_failure(self):
        with patch("roteiro.secrets.set_api_key", return_value=False):
            with pytest.raises(RuntimeError):
                KeyringCredentialStore().set("openai_api_key", "k")

    def test_list_api_keys(self, monkeypatch):
        for slot in KNOWN_KEYS:
            monkeypatch.delenv(env_var_name(slot), raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "g")

        def fake_get(service, slot):
            return "x" if slot == "claude_api_key" else None

        with patch("roteiro.secrets.keyring.get_password", side_effect=fake_get):
            status = list_api_keys()

        assert status["claude_api_key"] == "keychain"
        assert status["gemini_api_key"] == "env"
        assert status["openai_api_key"] == "not_set"
        assert set(status) == set(KNOWN_KEYS)

    def test_import_from_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# keys\n"
            "GEMINI_API_KEY=\"gem\"\n"
            "leonardo_api_key='leo'\n"
            "UNRELATED=1\n"
            "OPENAI_API_KEY=\n"
        )

        with patch("roteiro.secrets.set_api_key", return_value=True) as mock_set:
            results = import_from_env_file(str(env_file))

        assert results == {"gemini_api_key": True, "leonardo_api_key": True}
        mock_set.assert_any_call("gemini_api_key", "gem")
        mock_set.assert_any_call("leonardo_api_key", "leo")

    def test_import_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            import_from_env_file(str(tmp_path / "missing.env"))
