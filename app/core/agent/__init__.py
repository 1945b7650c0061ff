"""
Agent integration

Builds one delegated on-chain agent per credential set and drives single
message exchanges through it. The wallet platform, the action providers
and the LLM binding live behind ``AgentToolkitFactory``; the default
factory is ``app.providers.agentkit.AgentKitToolkitFactory``.
"""

from .wrapper import AgentBuild, AgentHandle, AgentToolkitFactory, AgentWrapper

__all__ = [
    "AgentBuild",
    "AgentHandle",
    "AgentToolkitFactory",
    "AgentWrapper",
]
