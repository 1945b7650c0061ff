"""
Coinbase AgentKit integration.

Builds the delegated agent for one credential set: a smart wallet provider
signed by the resolved key, a fixed list of action providers exposed as
LangChain tools, and a LangGraph ReAct agent bound to the caller's OpenAI
key. Everything here talks to external services and is synchronous; callers
run ``build`` in a worker thread.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent

from ..config import settings
from ..core.agent.prompts import build_instructions
from ..core.agent.wrapper import AgentBuild
from ..core.wallet.models import SigningKey
from ..types.requests import CredentialSet
from .llm import create_provider

try:
    from cdp import Cdp
    from coinbase_agentkit import (
        AgentKit,
        AgentKitConfig,
        SmartWalletProvider,
        SmartWalletProviderConfig,
        cdp_api_action_provider,
        erc20_action_provider,
        pyth_action_provider,
        wallet_action_provider,
        weth_action_provider,
    )
    from coinbase_agentkit.action_providers.cdp.cdp_api_action_provider import CdpProviderConfig
    from coinbase_agentkit_langchain import get_langchain_tools
    from eth_account import Account
except ImportError:
    Cdp = None
    AgentKit = AgentKitConfig = None
    SmartWalletProvider = SmartWalletProviderConfig = None
    CdpProviderConfig = None
    cdp_api_action_provider = erc20_action_provider = pyth_action_provider = None
    wallet_action_provider = weth_action_provider = None
    get_langchain_tools = None
    Account = None

logger = logging.getLogger(__name__)


class AgentKitToolkitFactory:
    """Default factory backed by coinbase-agentkit and langgraph."""

    def __init__(self, model: Optional[str] = None):
        if AgentKit is None:
            raise ImportError(
                "coinbase-agentkit packages not installed. "
                "Install with: pip install coinbase-agentkit coinbase-agentkit-langchain"
            )
        self.model = model or settings.openai_model

    def _action_providers(self, credentials: CredentialSet) -> List[Any]:
        return [
            weth_action_provider(),
            pyth_action_provider(),
            wallet_action_provider(),
            erc20_action_provider(),
            cdp_api_action_provider(
                CdpProviderConfig(
                    api_key_name=credentials.wallet_key_id,
                    api_key_private_key=credentials.wallet_private_key,
                )
            ),
        ]

    def build(self, credentials: CredentialSet, signing_key: SigningKey, credential_file: Path) -> AgentBuild:
        # Providers without explicit keys read ~/Downloads/cdp_api_key.json or CDP_API_KEY_* instead
        Cdp.configure_from_json(str(credential_file))

        signer = Account.from_key(signing_key.private_key)
        logger.info("Configuring smart wallet provider on %s", credentials.network_id.value)
        wallet_provider = SmartWalletProvider(
            SmartWalletProviderConfig(
                network_id=credentials.network_id.value,
                signer=signer,
                smart_wallet_address=signing_key.wallet_address,
                paymaster_url=None,
                cdp_api_key_name=credentials.wallet_key_id,
                cdp_api_key_private_key=credentials.wallet_private_key,
            )
        )

        agentkit = AgentKit(
            AgentKitConfig(
                wallet_provider=wallet_provider,
                action_providers=self._action_providers(credentials),
            )
        )
        tools = get_langchain_tools(agentkit)
        logger.info("AgentKit exposes %d tools", len(tools))

        llm = create_provider("openai", api_key=credentials.openai_key, model=self.model).chat_model()
        agent = create_react_agent(
            llm,
            tools=tools,
            checkpointer=MemorySaver(),
            prompt=build_instructions(credentials.network_id),
        )
        return AgentBuild(agent=agent, wallet_address=wallet_provider.get_address(), tool_count=len(tools))
