"""Dependency definitions for the Larder API server."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from larder.config import Settings, get_settings
from larder.inventory import build_inventory_client
from larder.llm import build_match_llm_client
from larder.matching import InventoryCache, InventoryMatcher

_MATCHER: Optional[InventoryMatcher] = None


def build_matcher(settings: Optional[Settings] = None) -> InventoryMatcher:
    """Wire the inventory API client, cache and optional LLM into a matcher."""

    settings = settings or get_settings()
    inventory = build_inventory_client(settings)
    cache = InventoryCache(
        inventory.list_pantry,
        inventory.list_shopping_list,
        ttl_seconds=settings.inventory_cache_ttl,
    )
    return InventoryMatcher(
        cache,
        llm_client=build_match_llm_client(settings),
        threshold=settings.match_threshold,
        llm_timeout=settings.matcher_llm_timeout,
    )


def get_matcher() -> InventoryMatcher:
    """Return the process-wide matcher so its inventory cache is shared."""

    global _MATCHER
    if _MATCHER is None:
        _MATCHER = build_matcher()
    return _MATCHER


def reset_matcher() -> None:
    global _MATCHER
    _MATCHER = None


def require_api_token(
    request: Request,
    settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return
    if request.headers.get("X-API-Key") == token:
        return
    if request.query_params.get("api_token") == token:
        return
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
