"""OpenAI/Ollama-compatible client for the LLM-assisted matching pass."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Sequence

import httpx

from larder.config import Settings, get_settings

LLM_TIMEOUT = 30.0
MAX_KNOWN_NAMES = 100
MIN_MATCH_CONFIDENCE = 70.0
_JSON_BLOCK_RE = re.compile(r"```(?:json)?\s*([\[{].*?[\]}])\s*```", re.DOTALL)

MATCH_SYSTEM_PROMPT = (
    "You are an expert grocery receipt OCR processor. Receipt text is noisy: letters are "
    "misread (\"aarut butler\" is \"Peanut Butter\", \"chiken\" is \"Chicken\"), words are "
    "abbreviated and prices or percentages leak into names. For each OCR item decide which "
    "known inventory item it refers to. Only propose a match when you are at least 70% "
    "confident; otherwise use null. Matched names must be copied EXACTLY from the known "
    "inventory list. The schema:\n"
    "{\n"
    '  "matches": [\n'
    '    {"ocr": "ocr text as given", "match": "exact known name or null", '
    '"confidence": number between 0 and 100}\n'
    "  ]\n"
    "}\n"
    "Return only JSON."
)

MATCH_USER_PROMPT = (
    "Known inventory items: {known_names}\n\n"
    "OCR-extracted receipt items:\n{ocr_items}\n\n"
    "Return strict JSON using the schema described earlier."
)

logger = logging.getLogger(__name__)


class MatchLLMClient:
    """Call an OpenAI/Ollama-compatible endpoint to map OCR names onto inventory names."""

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        provider: str,
        temperature: float,
        max_tokens: int,
        api_key: Optional[str] = None,
        timeout: float = LLM_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._provider = (provider or "openai").strip().lower()
        self._temperature = max(0.0, float(temperature))
        self._max_tokens = max(1, int(max_tokens))
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def match_names(
        self,
        unmatched: Sequence[str],
        known: Sequence[str],
    ) -> dict[str, Optional[str]]:
        if not unmatched or not known:
            return {}
        payload = self._build_payload(unmatched, known)
        content = await self._execute_chat(payload)

        json_blob = _extract_json_blob(content)
        try:
            parsed = json.loads(json_blob)
        except json.JSONDecodeError as exc:
            snippet = json_blob.strip().replace("\n", " ")[:200]
            raise ValueError(f"Match LLM returned invalid JSON: {exc}: payload={snippet}") from exc
        return _coerce_matches(parsed)

    def _build_payload(self, unmatched: Sequence[str], known: Sequence[str]) -> dict[str, str]:
        known_names = ", ".join(list(known)[:MAX_KNOWN_NAMES])
        if len(known) > MAX_KNOWN_NAMES:
            known_names += "..."
        ocr_items = "\n".join(f'{index}. "{name}"' for index, name in enumerate(unmatched, start=1))
        return {
            "system": MATCH_SYSTEM_PROMPT,
            "user": MATCH_USER_PROMPT.format(known_names=known_names, ocr_items=ocr_items),
        }

    async def _execute_chat(self, prompt_payload: dict[str, str]) -> str:
        messages = [
            {"role": "system", "content": prompt_payload["system"]},
            {"role": "user", "content": prompt_payload["user"]},
        ]
        if self._provider == "ollama":
            endpoint = self._base_url
            if not endpoint.endswith("/api/chat"):
                endpoint = f"{endpoint}/api/chat"
            payload = {
                "model": self._model,
                "messages": messages,
                "stream": False,
                "format": "json",
                "options": {
                    "temperature": self._temperature,
                    "num_predict": self._max_tokens,
                },
            }
            body = await self._post(endpoint, payload, headers={})
            message = body.get("message") or {}
            content = (message.get("content") or "").strip()
            if not content:
                raise ValueError("Ollama match response did not include content.")
            return content

        if not self._api_key:
            raise ValueError("Match LLM requires an API key for the openai provider.")
        endpoint = self._base_url
        if not endpoint.endswith("/chat/completions"):
            endpoint = f"{endpoint}/chat/completions"
        payload = {
            "model": self._model,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "messages": messages,
        }
        body = await self._post(
            endpoint,
            payload,
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        choices = body.get("choices") or []
        if not choices:
            raise ValueError("Match LLM returned no choices.")
        message = choices[0].get("message") or {}
        content = (message.get("content") or "").strip()
        if not content:
            raise ValueError("Match LLM returned an empty response.")
        return content

    async def _post(
        self,
        endpoint: str,
        payload: dict[str, Any],
        *,
        headers: dict[str, str],
    ) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(endpoint, json=payload, headers=headers)
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError("Match LLM returned a non-object response body.")
        return body


def _to_confidence(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _coerce_matches(parsed: Any) -> dict[str, Optional[str]]:
    """Accept ``{"matches": [...]}``, a bare list, or a plain ``{ocr: name}`` mapping."""

    if isinstance(parsed, dict) and "matches" in parsed:
        parsed = parsed["matches"]
    elif isinstance(parsed, dict) and isinstance(parsed.get("items"), list):
        parsed = parsed["items"]

    matches: dict[str, Optional[str]] = {}
    if isinstance(parsed, dict):
        for ocr_name, known_name in parsed.items():
            if isinstance(known_name, str) and known_name.strip():
                matches[str(ocr_name)] = known_name.strip()
            else:
                matches[str(ocr_name)] = None
        return matches

    if not isinstance(parsed, list):
        raise ValueError("Match LLM response did not contain a list of matches.")

    for entry in parsed:
        if not isinstance(entry, dict):
            continue
        ocr_name = entry.get("ocr") or entry.get("originalName")
        if not isinstance(ocr_name, str) or not ocr_name.strip():
            continue
        known_name = entry.get("match") or entry.get("matchedTo")
        confidence = _to_confidence(entry.get("confidence"))
        if (
            not isinstance(known_name, str)
            or not known_name.strip()
            or (confidence is not None and confidence < MIN_MATCH_CONFIDENCE)
        ):
            matches[ocr_name] = None
            continue
        matches[ocr_name] = known_name.strip()
    return matches


def _extract_json_blob(text: str) -> str:
    match = _JSON_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()

    starts = [index for index in (text.find("{"), text.find("[")) if index != -1]
    if starts:
        start = min(starts)
        closing = "}" if text[start] == "{" else "]"
        end = text.rfind(closing)
        if end > start:
            return text[start : end + 1].strip()
    return text.strip()


def build_match_llm_client(settings: Optional[Settings] = None) -> MatchLLMClient | None:
    """Create an LLM client when the matching second pass is enabled."""

    settings = settings or get_settings()
    if not settings.matcher_llm_enabled:
        return None

    base_url = settings.matcher_llm_base_url
    if not base_url:
        logger.debug("Match LLM enabled but no base URL configured.")
        return None

    provider = (settings.matcher_llm_provider or "openai").strip().lower()
    if provider != "ollama" and not settings.openai_api_key:
        logger.debug("Match LLM enabled but no API key configured.")
        return None

    return MatchLLMClient(
        base_url=base_url,
        model=settings.matcher_llm_model,
        provider=provider,
        temperature=settings.matcher_llm_temperature,
        max_tokens=settings.matcher_llm_max_tokens,
        api_key=settings.openai_api_key,
        timeout=settings.matcher_llm_timeout,
    )


__all__ = ["MatchLLMClient", "build_match_llm_client"]
