"""
Persisted wallet state.

One record per server process: the signing key that controls the smart
wallet and the smart wallet's address once the wallet platform has
assigned it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class WalletRecord:
    private_key: Optional[str] = None
    wallet_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalletRecord":
        # smartWalletAddress is the key written by earlier releases
        address = data.get("walletAddress") or data.get("smartWalletAddress")
        return cls(
            private_key=data.get("privateKey") or None,
            wallet_address=address or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"privateKey": self.private_key, "walletAddress": self.wallet_address}


@dataclass(frozen=True)
class SigningKey:
    """A resolved private key and where it came from (record, environment, generated)."""

    private_key: str
    source: str
    wallet_address: Optional[str] = None
