from pathlib import Path
from typing import Any, Dict

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

NETWORK_LABELS: Dict[str, str] = {
    "base-sepolia": "Base Sepolia (Testnet)",
    "base-mainnet": "Base Mainnet",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # LLM Configuration
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model bound to the agent and the key probe")

    # Wallet Platform
    default_network_id: str = Field(
        default="base-sepolia",
        description="Network used when a request does not name one",
        validation_alias=AliasChoices("default_network_id", "NETWORK_ID"),
    )
    private_key: str = Field(
        default="",
        description="Pre-provisioned signing key used when no wallet record holds one",
    )
    wallet_data_file: str = Field(
        default="wallet_data.txt",
        description="Path of the persisted wallet record",
    )
    credential_dir: str = Field(
        default="",
        description="Directory for the transient wallet-platform credential file (empty: system temp dir)",
    )

    # Agent Runtime
    agent_thread_prefix: str = Field(
        default="agentkit-chat",
        description="Prefix of the conversation thread id given to the agent checkpointer",
    )

    # Clients (Streamlit page and CLI)
    agent_api_url: str = Field(default="http://127.0.0.1:8000", description="Base URL the chat clients call")
    client_timeout_seconds: float = Field(default=120.0, description="HTTP timeout for chat clients")

    @property
    def has_private_key(self) -> bool:
        return bool(self.private_key)

    @property
    def wallet_data_path(self) -> Path:
        path = Path(self.wallet_data_file)
        return path if path.is_absolute() else BASE_DIR / path

    def network_label(self, network_id: str) -> str:
        return NETWORK_LABELS.get(network_id, network_id)

    def summary(self) -> Dict[str, Any]:
        """Non-secret view of the configuration for status endpoints."""
        return {
            "default_network": self.default_network_id,
            "model": self.openai_model,
            "has_private_key": self.has_private_key,
        }


# Global settings instance
settings = Settings()
