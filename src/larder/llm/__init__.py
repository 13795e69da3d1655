"""LLM collaborators used by the inventory matcher."""

from .client import MatchLLMClient, build_match_llm_client
from .interface import InventoryMatchLLM, NullMatchLLM

__all__ = ["InventoryMatchLLM", "MatchLLMClient", "NullMatchLLM", "build_match_llm_client"]
