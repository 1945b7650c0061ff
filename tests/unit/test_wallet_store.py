"""
Tests for the wallet record, signing key resolution and the credential file.
"""

import json
import stat

import pytest

from app.core.errors import ConstructionError
from app.core.wallet import (
    WalletRecord,
    generate_private_key,
    materialized_credentials,
    resolve_signing_key,
)

from tests.conftest import SMART_WALLET_ADDRESS


class TestWalletStore:

    def test_missing_file_is_no_record(self, wallet_store):
        assert wallet_store.load() is None

    def test_save_then_load(self, wallet_store):
        wallet_store.save(WalletRecord(private_key="0xabc", wallet_address=SMART_WALLET_ADDRESS))

        record = wallet_store.load()

        assert record == WalletRecord(private_key="0xabc", wallet_address=SMART_WALLET_ADDRESS)
        assert json.loads(wallet_store.path.read_text()) == {
            "privateKey": "0xabc",
            "walletAddress": SMART_WALLET_ADDRESS,
        }

    def test_reads_legacy_address_key(self, wallet_store):
        wallet_store.path.write_text(json.dumps({"privateKey": "0xabc", "smartWalletAddress": SMART_WALLET_ADDRESS}))

        assert wallet_store.load().wallet_address == SMART_WALLET_ADDRESS

    @pytest.mark.parametrize("contents", ["{not json", "[1, 2, 3]"])
    def test_unreadable_file_is_no_record(self, wallet_store, contents):
        wallet_store.path.write_text(contents)

        assert wallet_store.load() is None


class TestResolveSigningKey:

    def test_record_key_wins(self):
        record = WalletRecord(private_key="0xrecord", wallet_address=SMART_WALLET_ADDRESS)

        key = resolve_signing_key(record, "0xenv", "wallet_data.txt")

        assert key.private_key == "0xrecord"
        assert key.source == "record"
        assert key.wallet_address == SMART_WALLET_ADDRESS

    def test_environment_fallback_keeps_known_address(self):
        record = WalletRecord(private_key=None, wallet_address=SMART_WALLET_ADDRESS)

        key = resolve_signing_key(record, "0xenv", "wallet_data.txt")

        assert key.private_key == "0xenv"
        assert key.source == "environment"
        assert key.wallet_address == SMART_WALLET_ADDRESS

    def test_known_address_without_key_is_fatal(self):
        record = WalletRecord(private_key=None, wallet_address=SMART_WALLET_ADDRESS)

        with pytest.raises(ConstructionError) as exc_info:
            resolve_signing_key(record, "", "/srv/wallet_data.txt")

        message = exc_info.value.message
        assert "private key" in message
        assert "delete /srv/wallet_data.txt" in message

    def test_generates_when_nothing_is_known(self):
        key = resolve_signing_key(None, "", "wallet_data.txt")

        assert key.source == "generated"
        assert key.wallet_address is None
        assert key.private_key.startswith("0x")
        assert len(key.private_key) == 66

    def test_generated_keys_differ(self):
        assert generate_private_key() != generate_private_key()


class TestMaterializedCredentials:

    def test_file_exists_only_inside_block(self, credentials, credential_dir):
        with materialized_credentials(credentials, str(credential_dir)) as path:
            assert path.parent == credential_dir
            assert json.loads(path.read_text()) == {
                "name": credentials.wallet_key_id,
                "privateKey": credentials.wallet_private_key,
            }
            assert stat.S_IMODE(path.stat().st_mode) == 0o600

        assert not path.exists()
        assert list(credential_dir.iterdir()) == []

    def test_file_removed_when_block_raises(self, credentials, credential_dir):
        with pytest.raises(RuntimeError):
            with materialized_credentials(credentials, str(credential_dir)) as path:
                raise RuntimeError("wallet platform unreachable")

        assert not path.exists()
        assert list(credential_dir.iterdir()) == []

    def test_missing_directory_is_construction_error(self, credentials, tmp_path):
        with pytest.raises(ConstructionError):
            with materialized_credentials(credentials, str(tmp_path / "missing")):
                pass
