"""Prometheus metrics definitions for Larder."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "larder_http_requests_total",
    "Total number of HTTP requests processed by the Larder API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "larder_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Larder API",
    ["method", "path"],
)

RECEIPT_CANDIDATES = Counter(
    "larder_receipt_candidates_total",
    "Number of candidate line items segmented from receipt text",
    ["layout"],
)

MATCH_RESULTS = Counter(
    "larder_match_results_total",
    "Number of match results emitted by source tag",
    ["source"],
)

INVENTORY_CACHE_REFRESHES = Counter(
    "larder_inventory_cache_refreshes_total",
    "Number of times the inventory snapshot was re-fetched",
)

INVENTORY_FETCH_FAILURES = Counter(
    "larder_inventory_fetch_failures_total",
    "Number of failed inventory collection fetches",
    ["collection"],
)

MATCH_LLM_REQUESTS = Counter(
    "larder_match_llm_requests_total",
    "Number of LLM-assisted matching passes by outcome",
    ["status"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "RECEIPT_CANDIDATES",
    "MATCH_RESULTS",
    "INVENTORY_CACHE_REFRESHES",
    "INVENTORY_FETCH_FAILURES",
    "MATCH_LLM_REQUESTS",
]
