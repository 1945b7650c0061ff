from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..core.errors import InputError


class NetworkId(str, Enum):
    TESTNET = "base-sepolia"
    MAINNET = "base-mainnet"


# Wire name used in error messages for each credential field
REQUIRED_KEY_FIELDS = {
    "openai_key": "openaiKey",
    "wallet_key_id": "walletKeyId",
    "wallet_private_key": "walletPrivateKey",
}


class CredentialSet(BaseModel):
    """Validated credentials; the only shape internal components accept."""

    model_config = ConfigDict(frozen=True)

    openai_key: str = Field(min_length=1, description="Model provider API key")
    wallet_key_id: str = Field(min_length=1, description="Wallet platform API key id")
    wallet_private_key: str = Field(min_length=1, description="Wallet platform API private key (PEM, Base64 or hex)")
    network_id: NetworkId = Field(default=NetworkId.TESTNET, description="Target network")

    def __repr__(self) -> str:
        return f"CredentialSet(wallet_key_id={self.wallet_key_id!r}, network_id={self.network_id.value!r})"

    __str__ = __repr__


class ApiKeys(BaseModel):
    """Credentials exactly as a client sent them; nothing is guaranteed present."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    openai_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("openaiKey", "openai_key"),
    )
    wallet_key_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("walletKeyId", "wallet_key_id", "cdpApiKeyName"),
    )
    wallet_private_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("walletPrivateKey", "wallet_private_key", "cdpPrivateKey"),
    )
    network_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("networkId", "network_id"),
    )

    def missing_fields(self) -> List[str]:
        return [
            wire_name
            for attr, wire_name in REQUIRED_KEY_FIELDS.items()
            if not (getattr(self, attr) or "").strip()
        ]

    def to_credentials(self, default_network: str = NetworkId.TESTNET.value) -> CredentialSet:
        """Promote to a CredentialSet or raise InputError naming what is wrong."""
        missing = self.missing_fields()
        if missing:
            raise InputError(
                "API keys are required. Missing: "
                + ", ".join(missing)
                + ". OpenAI API key, wallet API key id, and wallet private key are required."
            )

        network = (self.network_id or "").strip() or default_network
        try:
            network_id = NetworkId(network)
        except ValueError:
            allowed = ", ".join(n.value for n in NetworkId)
            raise InputError(f"Unsupported network '{network}'. Use one of: {allowed}.")

        return CredentialSet(
            openai_key=self.openai_key.strip(),
            wallet_key_id=self.wallet_key_id.strip(),
            wallet_private_key=self.wallet_private_key.strip(),
            network_id=network_id,
        )


class AgentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_message: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("userMessage", "user_message"),
        description="Message for the agent",
    )
    api_keys: Optional[ApiKeys] = Field(
        default=None,
        validation_alias=AliasChoices("apiKeys", "api_keys"),
        description="Credentials configured in the client",
    )


class ValidateKeysRequest(ApiKeys):
    """Body of ``POST /validate-keys``: the credential fields at top level."""
