"""
Wallet record storage, signing key resolution and the transient
wallet-platform credential file.
"""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from eth_account import Account

from ...logging_config import get_logger
from ...types.requests import CredentialSet
from ..errors import ConstructionError
from .models import SigningKey, WalletRecord

logger = get_logger(__name__)

CREDENTIAL_FILE_PREFIX = "wallet_platform_api_key_"


class WalletStore:
    """JSON file holding the single wallet record of this process."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[WalletRecord]:
        """Return the stored record; a missing or unreadable file counts as no record."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("wallet_record_unreadable", path=str(self.path), error_type=type(exc).__name__)
            return None
        if not isinstance(data, dict):
            logger.warning("wallet_record_unreadable", path=str(self.path), error_type="NotAnObject")
            return None
        return WalletRecord.from_dict(data)

    def save(self, record: WalletRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(record.to_dict()), encoding="utf-8")
        logger.info("wallet_record_saved", path=str(self.path), wallet_address=record.wallet_address)


def generate_private_key() -> str:
    account = Account.create()
    return "0x" + bytes(account.key).hex()


def resolve_signing_key(
    record: Optional[WalletRecord],
    fallback_key: Optional[str],
    record_path: Path | str,
) -> SigningKey:
    """Pick the key that signs for the smart wallet.

    Order: the stored record, then the pre-provisioned fallback, then a fresh
    key. A record that names a wallet address but holds no key is fatal:
    generating a key there would silently create a different wallet.
    """
    if record and record.private_key:
        return SigningKey(record.private_key, "record", record.wallet_address)

    if fallback_key:
        return SigningKey(fallback_key, "environment", record.wallet_address if record else None)

    if record and record.wallet_address:
        raise ConstructionError(
            "I found your smart wallet but can't access your private key. "
            "Please either provide the private key in your .env (PRIVATE_KEY), "
            f"or delete {record_path} to create a new wallet."
        )

    return SigningKey(generate_private_key(), "generated")


@contextmanager
def materialized_credentials(
    credentials: CredentialSet, directory: Optional[str] = None
) -> Iterator[Path]:
    """Write the wallet-platform key to a private temp file for the SDK to read.

    The file is removed on exit whether or not the body raised.
    """
    try:
        fd, name = tempfile.mkstemp(prefix=CREDENTIAL_FILE_PREFIX, suffix=".json", dir=directory or None)
    except OSError as exc:
        raise ConstructionError(f"Failed to create wallet API key file: {exc}")

    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(
                {"name": credentials.wallet_key_id, "privateKey": credentials.wallet_private_key},
                handle,
            )
        logger.debug("credential_file_written", path=str(path))
        yield path
    finally:
        try:
            path.unlink()
            logger.debug("credential_file_removed", path=str(path))
        except FileNotFoundError:
            pass
