#!/usr/bin/env python3
"""Terminal client for the AgentKit chat API"""

import argparse
import getpass
import os
import sys
from typing import Optional

import httpx

from app.config import NETWORK_LABELS, settings
from app.types import Sender
from app.ui.client import AgentApiClient
from app.ui.session import ChatSession


def prompt_secret(label: str, env_var: str) -> str:
    value = os.getenv(env_var)
    if value:
        print(f"{label}: (from ${env_var})")
        return value
    return getpass.getpass(f"{label}: ")


def configure_session(session: ChatSession, network_id: str) -> bool:
    print("🔐 Configure API Keys (kept in memory only)")
    print("-" * 40)
    openai_key = prompt_secret("OpenAI API key", "OPENAI_API_KEY")
    key_id = input("Wallet API key id: ").strip()
    private_key = prompt_secret("Wallet API private key", "WALLET_API_PRIVATE_KEY")

    print("Validating...")
    if session.configure(openai_key, key_id, private_key, network_id):
        print(f"✅ Connected to {settings.network_label(network_id)}")
        return True

    print(f"❌ {session.error}")
    return False


def cli_chat(base_url: Optional[str], network_id: str):
    """Interactive chat mode"""
    with AgentApiClient(base_url=base_url) as client:
        session = ChatSession(client)
        if not configure_session(session, network_id):
            return 1

        print("\n🤖 AgentKit Chat")
        print("Type 'exit' to quit, 'help' for commands")
        print("-" * 40)

        while True:
            try:
                user_input = input("\n💬 You: ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\nGoodbye! 👋")
                break

            command = user_input.lower()
            if command in ["exit", "quit", "q"]:
                print("Goodbye! 👋")
                break

            elif command in ["help", "h"]:
                print("\nCommands:")
                print("  help - Show this help")
                print("  exit - Quit the chat")
                print("  keys - Change API keys")
                print("  What's my balance? - Ask the agent")
                continue

            elif command == "keys":
                session.reset()
                if not configure_session(session, network_id):
                    return 1
                continue

            elif not user_input:
                continue

            print("🤖 Thinking...")
            reply = session.send(user_input)
            if reply is not None and reply.sender == Sender.AGENT:
                print(f"🤖 Agent: {reply.text}")
    return 0


def cli_status(base_url: Optional[str]):
    """Print the API status and health payloads."""
    url = base_url or settings.agent_api_url
    try:
        status = httpx.get(f"{url}/agent", timeout=10).json()
        health = httpx.get(f"{url}/healthz", timeout=10).json()
    except httpx.HTTPError as e:
        print(f"❌ API unreachable at {url}: {e}")
        return 1

    print(f"✅ {status.get('message')}")
    print(f"   Cached agents: {health.get('cached_agents')}")
    print(f"   Default network: {health.get('default_network')}")
    print(f"   Model: {health.get('model')}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AgentKit Chat CLI")
    parser.add_argument("--url", help=f"API base URL (default: {settings.agent_api_url})")
    subparsers = parser.add_subparsers(dest="command")

    chat_parser = subparsers.add_parser("chat", help="Interactive chat mode")
    chat_parser.add_argument(
        "--network",
        choices=list(NETWORK_LABELS),
        default=settings.default_network_id,
        help="Network the agent acts on",
    )

    subparsers.add_parser("status", help="Check that the API is running")

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "chat":
        return cli_chat(args.url, args.network)

    elif args.command == "status":
        return cli_status(args.url)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
