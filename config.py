# === config.py: Laden und Speichern der config.json ===

import json
import os
from typing import Any, Dict, Optional

from constants import DEFAULT_LANGUAGE, METADATA_URI, TOKEN_DESCRIPTION, TRANSLATIONS

CONFIG_FILE = "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "rpc_url": "https://api.devnet.solana.com",
    "cluster": "devnet",
    "commitment": "confirmed",
    "wallet_path": "",
    "language": DEFAULT_LANGUAGE,
    "metadata_uri": METADATA_URI,
    "token_description": TOKEN_DESCRIPTION,
    "log_folder": "logs",
}

# Umgebungsvariablen überschreiben Werte aus der Datei
ENV_OVERRIDES = {
    "SOLANA_RPC_URL": "rpc_url",
    "SOLANA_WALLET": "wallet_path",
}

VALID_COMMITMENTS = ("processed", "confirmed", "finalized")


class ConfigError(Exception):
    """Die Konfiguration konnte nicht gelesen oder ist ungültig."""


def load_config(path: str = CONFIG_FILE, create_missing: bool = True) -> Dict[str, Any]:
    """Lädt die Konfiguration; fehlt die Datei, wird sie mit Standardwerten angelegt."""
    config = dict(DEFAULT_CONFIG)
    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"'{path}' ist fehlerhaft formatiert: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"'{path}' muss ein JSON-Objekt enthalten.")
        config.update(data)
    elif create_missing:
        save_config(config, path)

    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            config[key] = value

    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    if not str(config.get("rpc_url", "")).startswith(("http://", "https://")):
        raise ConfigError(f"Ungültige RPC-URL: {config.get('rpc_url')!r}")
    if config.get("commitment") not in VALID_COMMITMENTS:
        raise ConfigError(f"Ungültiges Commitment: {config.get('commitment')!r} (erlaubt: {', '.join(VALID_COMMITMENTS)})")
    if config.get("language") not in TRANSLATIONS:
        raise ConfigError(f"Nicht unterstützte Sprache: {config.get('language')!r}")


def save_config(config: Dict[str, Any], path: str = CONFIG_FILE) -> None:
    """Speichert die Konfiguration in die config.json."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=4)


def apply_cli_overrides(config: Dict[str, Any], rpc_url: Optional[str] = None,
                        wallet: Optional[str] = None, lang: Optional[str] = None) -> Dict[str, Any]:
    """Übernimmt Kommandozeilen-Argumente (haben Vorrang vor Datei und Umgebung)."""
    if rpc_url:
        config["rpc_url"] = rpc_url
    if wallet:
        config["wallet_path"] = wallet
    if lang:
        config["language"] = lang
    validate_config(config)
    return config
