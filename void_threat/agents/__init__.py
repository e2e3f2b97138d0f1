"""Player agents that choose night actions, votes and revenge targets."""

from .base_agent import BaseAgent, AgentContext
from .dummy_agent import DummyAgent

__all__ = ['BaseAgent', 'AgentContext', 'DummyAgent']
