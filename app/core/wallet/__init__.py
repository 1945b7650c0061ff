"""
Wallet Management Module

Keeps the signing key behind the agent's smart wallet across restarts and
hands the wallet platform its API key for the duration of one agent build:
- WalletStore: load/save the process-wide wallet record
- resolve_signing_key: record key, then PRIVATE_KEY, then a fresh key
- materialized_credentials: scoped temp file with the platform API key

Usage:
    from app.core.wallet import WalletStore, resolve_signing_key, materialized_credentials

    store = WalletStore(settings.wallet_data_path)
    record = store.load()
    key = resolve_signing_key(record, settings.private_key, store.path)

    with materialized_credentials(credentials) as key_file:
        ...  # build the wallet provider while the file exists
"""

from .models import SigningKey, WalletRecord
from .store import (
    WalletStore,
    generate_private_key,
    materialized_credentials,
    resolve_signing_key,
)

__all__ = [
    "SigningKey",
    "WalletRecord",
    "WalletStore",
    "generate_private_key",
    "materialized_credentials",
    "resolve_signing_key",
]
