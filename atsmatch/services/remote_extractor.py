from __future__ import annotations

import asyncio
import hashlib
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Awaitable, Callable

import httpx
from pydantic import ValidationError

from atsmatch.core.config import settings
from atsmatch.errors import (
    RemoteAuthError,
    RemoteExtractionError,
    RemoteQuotaError,
    RemoteTimeoutError,
)
from atsmatch.schemas.keywords import ExperienceRequirement, ExtractionResult, Keyword

logger = logging.getLogger(__name__)

BACKOFF_BASE_S = 1.0

Sleeper = Callable[[float], Awaitable[None]]


def build_headers(auth_token: str | None, anon_key: str | None) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
        if anon_key:
            headers["apikey"] = anon_key
    elif anon_key:
        headers["Authorization"] = f"Bearer {anon_key}"
        headers["apikey"] = anon_key
    return headers


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    # Plain `{"error": ...}` bodies, or FastAPI `{"detail": ...}` wrappers around one.
    detail = body.get("detail")
    for candidate in (body.get("error"), detail, detail.get("error") if isinstance(detail, dict) else None):
        if isinstance(candidate, str) and candidate:
            return candidate
    return None


def _importance(value: Any) -> int:
    try:
        return max(0, min(100, round(float(value))))
    except (TypeError, ValueError):
        return 50


_REQUIREMENT_LEVELS = frozenset({"required", "preferred", "optional", "neutral"})


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _requirement_level(item: dict[str, Any]) -> str:
    level = item.get("requirementLevel") or item.get("requirement_level")
    level = level.strip().lower() if isinstance(level, str) else ""
    return level if level in _REQUIREMENT_LEVELS else "neutral"


def _keywords(items: Any, category: str) -> list[Keyword]:
    keywords: list[Keyword] = []
    for item in _as_list(items):
        if isinstance(item, str):
            item = {"term": item}
        if not isinstance(item, dict):
            continue
        data = {
            "term": item.get("term") or item.get("keyword") or "",
            "category": category,
            "requirement_level": _requirement_level(item),
            "importance": _importance(item.get("importance")),
        }
        try:
            keywords.append(Keyword.model_validate(data))
        except ValidationError:
            logger.debug("remote_keyword_dropped term=%r", data["term"])
    return keywords


def parse_extraction_payload(data: dict[str, Any]) -> ExtractionResult:
    requirements: list[ExperienceRequirement] = []
    for item in _as_list(data.get("experienceRequirements")):
        try:
            requirements.append(ExperienceRequirement.model_validate(item))
        except ValidationError:
            logger.debug("remote_experience_dropped item=%r", item)
    return ExtractionResult(
        hard_skills=_keywords(data.get("hardSkills"), "hard"),
        soft_skills=_keywords(data.get("softSkills"), "soft"),
        experience_requirements=requirements,
        certifications=[str(item).strip() for item in _as_list(data.get("certifications")) if str(item).strip()],
    )


async def _request_once(
    client: httpx.AsyncClient,
    url: str,
    text: str,
    headers: dict[str, str],
    timeout: float,
) -> ExtractionResult:
    try:
        response = await client.post(url, json={"jobDescription": text}, headers=headers, timeout=timeout)
    except httpx.TimeoutException as exc:
        raise RemoteTimeoutError(f"Request timeout after {timeout}s") from exc
    except httpx.HTTPError as exc:
        raise RemoteExtractionError(f"Keyword extraction request failed: {exc}") from exc

    if response.status_code == 401:
        raise RemoteAuthError()
    if response.status_code == 429:
        raise RemoteQuotaError()
    if response.is_error:
        message = _error_message(response)
        if response.status_code == 400:
            message = message or "Invalid job description"
        raise RemoteExtractionError(
            message or f"API error: {response.status_code}",
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except ValueError as exc:
        raise RemoteExtractionError("Invalid response from keyword extraction API") from exc
    if not isinstance(body, dict) or not body.get("success") or not isinstance(body.get("data"), dict):
        raise RemoteExtractionError("Invalid response from keyword extraction API")
    try:
        return parse_extraction_payload(body["data"])
    except (TypeError, ValueError, AttributeError) as exc:
        raise RemoteExtractionError("Invalid response from keyword extraction API") from exc


async def extract_remote(
    text: str,
    auth_token: str | None = None,
    *,
    timeout: float | None = None,
    max_retries: int | None = None,
    url: str | None = None,
    anon_key: str | None = None,
    client: httpx.AsyncClient | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> ExtractionResult:
    """Hosted LLM keyword extraction.

    Auth (401) and quota (429) failures are raised immediately; anything else is
    retried with exponential backoff until ``max_retries`` attempts are used.
    """
    if not text or not text.strip():
        raise RemoteExtractionError("Job description is required", code="remote_invalid_input")
    endpoint = url or settings.keyword_extraction_url
    if not endpoint:
        raise RemoteExtractionError("Keyword extraction URL not configured", code="remote_unconfigured")

    timeout = timeout if timeout is not None else settings.remote_timeout_s
    attempts = max(1, max_retries if max_retries is not None else settings.remote_max_retries)
    headers = build_headers(auth_token, anon_key if anon_key is not None else settings.keyword_extraction_anon_key)
    payload_text = text[: settings.remote_max_input_chars]

    owns_client = client is None
    http = client or httpx.AsyncClient()
    started = time.perf_counter()
    last_error: RemoteExtractionError | None = None
    try:
        for attempt in range(attempts):
            try:
                result = await _request_once(http, endpoint, payload_text, headers, timeout)
            except (RemoteAuthError, RemoteQuotaError):
                raise
            except RemoteExtractionError as exc:
                last_error = exc
                logger.warning("remote_extraction_failed attempt=%s error=%s", attempt + 1, exc)
                if attempt < attempts - 1:
                    await sleep(BACKOFF_BASE_S * (2**attempt))
                continue
            logger.info(
                "remote_extraction_ok hard=%s soft=%s authenticated=%s latency_ms=%s",
                len(result.hard_skills),
                len(result.soft_skills),
                bool(auth_token),
                int((time.perf_counter() - started) * 1000),
            )
            return result
    finally:
        if owns_client:
            await http.aclose()

    raise last_error or RemoteExtractionError("All retry attempts failed")


def cache_key(text: str) -> str:
    return hashlib.sha256(text.strip().lower().encode("utf-8")).hexdigest()


class RemoteKeywordCache:
    """Content-addressed results with a TTL, keeping the most recent entries."""

    def __init__(self, ttl_s: float = 3600, max_entries: int = 50, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl_s = ttl_s
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, ExtractionResult]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, text: str) -> ExtractionResult | None:
        key = cache_key(text)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, result = entry
            if self._clock() - stored_at >= self._ttl_s:
                del self._entries[key]
                return None
            return result

    def set(self, text: str, result: ExtractionResult) -> None:
        key = cache_key(text)
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock(), result)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, (stored_at, _) in self._entries.items() if now - stored_at >= self._ttl_s]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


async def extract_remote_cached(
    text: str,
    cache: RemoteKeywordCache,
    auth_token: str | None = None,
    **kwargs: Any,
) -> ExtractionResult:
    cached = cache.get(text)
    if cached is not None:
        logger.info("remote_extraction_cache_hit")
        return cached
    result = await extract_remote(text, auth_token, **kwargs)
    cache.set(text, result)
    return result
