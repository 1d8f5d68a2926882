"""
Secure API key management using OS keychain.

Supports:
- Windows: Windows Credential Manager
- macOS: macOS Keychain
- Linux: Secret Service API (GNOME Keyring, KWallet)

Credential slots are the lowercase names from the provider registry
(``gemini_api_key``, ``leonardo_api_key``, ...). The environment fallback
reads the upper-cased slot name (``GEMINI_API_KEY``).

Usage:
    from roteiro.secrets import get_api_key, set_api_key

    # Get key (checks keychain first, falls back to env var)
    key = get_api_key("openai_api_key")

    # Store key in keychain
    set_api_key("openai_api_key", "sk-...")

The generation core never calls these helpers directly; it receives a
CredentialStore so tests and alternative backends can be swapped in.
"""

import os
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

import keyring
import keyring.errors

from roteiro.providers.registry import PROVIDER_REGISTRY

logger = logging.getLogger(__name__)

# Service name for keychain entries
SERVICE_NAME = "roteiro-studio"

# Known credential slots and what they unlock
KNOWN_KEYS: Dict[str, str] = {
    descriptor.credential_slot: f"{descriptor.display_name} ({descriptor.category.value})"
    for descriptor in PROVIDER_REGISTRY.values()
}


def env_var_name(slot: str) -> str:
    return slot.upper()


def _mask_secret(value: Optional[str]) -> str:
    """Mask a secret value for safe display in logs/repr."""
    if value is None:
        return "None"
    if len(value) <= 8:
        return "'***'"
    return f"'{value[:4]}...{value[-4:]}'"


class CredentialStore(ABC):
    """Key-value capability the core reads credentials from"""

    @abstractmethod
    def get(self, slot: str) -> Optional[str]:
        """Return the secret for ``slot`` or None when absent"""
        pass

    @abstractmethod
    def set(self, slot: str, secret: str) -> None:
        pass


class MemoryCredentialStore(CredentialStore):
    """Process-local store; nothing survives the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, slot: str) -> Optional[str]:
        return self._values.get(slot) or None

    def set(self, slot: str, secret: str) -> None:
        self._values[slot] = secret.strip()

    def __repr__(self) -> str:
        masked = {k: _mask_secret(v) for k, v in self._values.items()}
        return f"MemoryCredentialStore({masked})"


class EnvCredentialStore(CredentialStore):
    """Reads ``<SLOT>`` environment variables; ``set`` only affects this process"""

    def get(self, slot: str) -> Optional[str]:
        return os.environ.get(env_var_name(slot)) or None

    def set(self, slot: str, secret: str) -> None:
        os.environ[env_var_name(slot)] = secret.strip()


class KeyringCredentialStore(CredentialStore):
    """OS keychain first, environment variables as fallback"""

    def __init__(self, service_name: str = SERVICE_NAME, fallback_to_env: bool = True):
        self.service_name = service_name
        self.fallback_to_env = fallback_to_env

    def get(self, slot: str) -> Optional[str]:
        return get_api_key(slot, fallback_to_env=self.fallback_to_env, service_name=self.service_name)

    def set(self, slot: str, secret: str) -> None:
        if not set_api_key(slot, secret, service_name=self.service_name):
            raise RuntimeError(f"Failed to store {slot} in keychain")


def get_api_key(
    key_name: str,
    fallback_to_env: bool = True,
    service_name: str = SERVICE_NAME
) -> Optional[str]:
    """
    Get an API key, checking keychain first then environment variables.

    Args:
        key_name: Credential slot (e.g., "openai_api_key")
        fallback_to_env: If True, check environment variables if not in keychain
        service_name: Keychain service the slot is stored under

    Returns:
        The API key value, or None if not found
    """
    try:
        value = keyring.get_password(service_name, key_name)
        if value:
            logger.debug(f"Retrieved {key_name} from secure keychain")
            return value
    except keyring.errors.KeyringError as e:
        logger.debug(f"Keychain access failed for {key_name}: {e}")

    if fallback_to_env:
        value = os.environ.get(env_var_name(key_name))
        if value:
            logger.debug(f"Retrieved {key_name} from environment variable")
            return value

    return None


def set_api_key(key_name: str, value: str, service_name: str = SERVICE_NAME) -> bool:
    """
    Store an API key in the OS keychain.

    Returns:
        True if successful, False otherwise
    """
    try:
        keyring.set_password(service_name, key_name, value.strip())
        logger.info(f"Stored {key_name} in secure keychain")
        return True
    except keyring.errors.KeyringError as e:
        logger.error(f"Failed to store {key_name} in keychain: {e}")
        return False


def delete_api_key(key_name: str, service_name: str = SERVICE_NAME) -> bool:
    """
    Delete an API key from the OS keychain.

    Returns:
        True if successful, False otherwise
    """
    try:
        keyring.delete_password(service_name, key_name)
        logger.info(f"Deleted {key_name} from secure keychain")
        return True
    except keyring.errors.PasswordDeleteError:
        logger.warning(f"{key_name} not found in keychain")
        return False
    except keyring.errors.KeyringError as e:
        logger.error(f"Failed to delete {key_name} from keychain: {e}")
        return False


def list_api_keys(service_name: str = SERVICE_NAME) -> Dict[str, str]:
    """
    List all known credential slots and their status.

    Returns:
        Dict mapping slot names to their status:
        - "keychain": stored in secure keychain
        - "env": available in environment variable
        - "not_set": not configured
    """
    status = {}

    for key_name in KNOWN_KEYS:
        try:
            if keyring.get_password(service_name, key_name):
                status[key_name] = "keychain"
                continue
        except keyring.errors.KeyringError as e:
            logger.debug(f"Keychain access failed for {key_name}: {e}")

        if os.environ.get(env_var_name(key_name)):
            status[key_name] = "env"
        else:
            status[key_name] = "not_set"

    return status


def import_from_env_file(env_path: str) -> Dict[str, bool]:
    """
    Import API keys from a .env file into the keychain.

    Only lines whose key matches a known slot (either case) are imported.

    Returns:
        Dict mapping slot names to success status
    """
    results = {}
    env_file = Path(env_path)

    if not env_file.exists():
        raise FileNotFoundError(f"File not found: {env_path}")

    with open(env_file, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                slot = key.strip().lower()
                value = value.strip().strip('"').strip("'")

                if slot in KNOWN_KEYS and value:
                    results[slot] = set_api_key(slot, value)

    return results


def is_keyring_available() -> bool:
    """Check if a usable keyring backend is configured."""
    try:
        backend = keyring.get_keyring()
    except keyring.errors.KeyringError:
        return False
    # The fail backend reports priority 0
    return getattr(backend, "priority", 0) > 0
