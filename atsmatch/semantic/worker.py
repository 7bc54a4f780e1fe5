"""Off-thread embedding inference.

``EmbeddingWorker`` is a single-thread actor: it owns the embedding provider,
drains a bounded mailbox of correlated ``WorkerRequest`` objects and reports
back through ``WorkerEvent`` messages (ready, loading_progress, result, error).
``SemanticKeywordExtractor`` is the asyncio-side controller that turns those
events into awaitable results with timeouts.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from atsmatch.errors import SemanticTimeoutError, SemanticUnavailableError

from .embeddings import EmbeddingProvider, ProgressCallback, SentenceTransformerProvider, cosine_similarity
from .extractor import DEFAULT_MIN_SCORE, DEFAULT_TOP_N, SemanticKeyword, rank_candidates, rescale_scores

logger = logging.getLogger(__name__)

RequestKind = Literal["extract_keywords", "generate_embedding", "calculate_similarity", "unload"]
EventKind = Literal["ready", "loading_progress", "result", "error"]
ProviderFactory = Callable[[ProgressCallback], EmbeddingProvider]


@dataclass(frozen=True, slots=True)
class WorkerRequest:
    id: int
    kind: RequestKind
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class WorkerEvent:
    kind: EventKind
    id: int | None = None
    data: Any = None
    error: str | None = None


def sentence_transformer_factory(model_name: str) -> ProviderFactory:
    def factory(progress: ProgressCallback) -> EmbeddingProvider:
        provider = SentenceTransformerProvider(model_name, progress_callback=progress)
        provider.load()
        return provider

    return factory


class EmbeddingWorker:
    def __init__(
        self,
        provider_factory: ProviderFactory,
        emit: Callable[[WorkerEvent], None],
        *,
        mailbox_size: int = 16,
    ) -> None:
        self._provider_factory = provider_factory
        self._emit = emit
        self._mailbox: queue.Queue[WorkerRequest | None] = queue.Queue(maxsize=mailbox_size)
        self._thread: threading.Thread | None = None

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="embedding-worker", daemon=True)
        self._thread.start()

    def submit(self, request: WorkerRequest) -> None:
        if not self.alive:
            raise SemanticUnavailableError("Embedding worker is not running.")
        try:
            self._mailbox.put_nowait(request)
        except queue.Full as exc:
            raise SemanticUnavailableError("Embedding worker mailbox is full.") from exc

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        if self._thread.is_alive():
            try:
                self._mailbox.put(None, timeout=timeout)
            except queue.Full:
                logger.warning("embedding_worker_stop_mailbox_full")
            self._thread.join(timeout)
        self._thread = None

    def _progress(self, data: dict[str, Any]) -> None:
        self._emit(WorkerEvent(kind="loading_progress", data=data))

    def _run(self) -> None:
        try:
            provider = self._provider_factory(self._progress)
        except Exception as exc:  # noqa: BLE001 - reported to the controller
            logger.warning("embedding_worker_load_failed error=%s", exc)
            self._emit(WorkerEvent(kind="error", error=str(exc)))
            return

        self._emit(WorkerEvent(kind="ready"))
        while True:
            request = self._mailbox.get()
            if request is None:
                break
            try:
                data = self._handle(provider, request)
            except Exception as exc:  # noqa: BLE001 - reported to the controller
                logger.warning("embedding_worker_request_failed kind=%s id=%s error=%s", request.kind, request.id, exc)
                self._emit(WorkerEvent(kind="error", id=request.id, error=str(exc)))
                continue
            self._emit(WorkerEvent(kind="result", id=request.id, data=data))
            if request.kind == "unload":
                break

    @staticmethod
    def _handle(provider: EmbeddingProvider, request: WorkerRequest) -> Any:
        payload = request.payload
        if request.kind == "extract_keywords":
            return rank_candidates(payload["text"], provider, int(payload.get("top_n") or DEFAULT_TOP_N))
        if request.kind == "generate_embedding":
            return provider.embed([payload["text"]])[0]
        if request.kind == "calculate_similarity":
            return cosine_similarity(payload["vector_a"], payload["vector_b"])
        if request.kind == "unload":
            if isinstance(provider, SentenceTransformerProvider):
                SentenceTransformerProvider.unload(provider.model_name)
            return True
        raise ValueError(f"Unknown request kind: {request.kind}")


class SemanticKeywordExtractor:
    def __init__(
        self,
        provider_factory: ProviderFactory,
        *,
        mailbox_size: int = 16,
        ready_timeout_s: float = 30.0,
        request_timeout_s: float = 60.0,
        on_progress: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        self._worker = EmbeddingWorker(provider_factory, self._on_event, mailbox_size=mailbox_size)
        self._ready_timeout_s = ready_timeout_s
        self._request_timeout_s = request_timeout_s
        self._on_progress = on_progress
        self._ids = itertools.count(1)
        self._pending: dict[int, asyncio.Future[Any]] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._ready: asyncio.Future[None] | None = None

    def start(self) -> None:
        """Spawn the worker; must be called from a running event loop."""
        if self._loop is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._ready = self._loop.create_future()
        self._worker.start()

    def is_ready(self) -> bool:
        ready = self._ready
        return ready is not None and ready.done() and not ready.cancelled() and ready.exception() is None

    def _on_event(self, event: WorkerEvent) -> None:
        # Called from the worker thread.
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._dispatch, event)

    def _dispatch(self, event: WorkerEvent) -> None:
        if event.kind == "loading_progress":
            logger.debug("embedding_model_progress data=%s", event.data)
            if self._on_progress:
                self._on_progress(event.data)
            return
        if event.kind == "ready":
            if self._ready is not None and not self._ready.done():
                self._ready.set_result(None)
            return
        if event.id is None:
            if self._ready is not None and not self._ready.done():
                self._ready.set_exception(SemanticUnavailableError(event.error or "Embedding model failed to load."))
            return

        future = self._pending.pop(event.id, None)
        if future is None:
            logger.warning("embedding_worker_unknown_response id=%s", event.id)
            return
        if future.done():
            return
        if event.kind == "error":
            future.set_exception(SemanticUnavailableError(event.error or "Embedding request failed."))
        else:
            future.set_result(event.data)

    async def wait_ready(self, timeout: float | None = None) -> None:
        if self._ready is None:
            self.start()
        assert self._ready is not None
        try:
            await asyncio.wait_for(asyncio.shield(self._ready), timeout or self._ready_timeout_s)
        except asyncio.TimeoutError as exc:
            raise SemanticTimeoutError("Embedding worker did not become ready in time.") from exc

    async def _send(self, kind: RequestKind, payload: dict[str, Any], timeout: float | None) -> Any:
        await self.wait_ready()
        assert self._loop is not None
        request = WorkerRequest(id=next(self._ids), kind=kind, payload=payload)
        future: asyncio.Future[Any] = self._loop.create_future()
        self._pending[request.id] = future
        try:
            self._worker.submit(request)
            return await asyncio.wait_for(future, timeout or self._request_timeout_s)
        except asyncio.TimeoutError as exc:
            raise SemanticTimeoutError(f"Request timeout: {kind}") from exc
        finally:
            self._pending.pop(request.id, None)

    async def extract(
        self,
        text: str,
        *,
        top_n: int = DEFAULT_TOP_N,
        min_score: float = DEFAULT_MIN_SCORE,
        timeout: float | None = None,
    ) -> list[SemanticKeyword]:
        ranked = await self._send("extract_keywords", {"text": text, "top_n": top_n}, timeout)
        return rescale_scores(ranked, min_score)

    async def generate_embedding(self, text: str, timeout: float = 30.0) -> list[float]:
        return await self._send("generate_embedding", {"text": text}, timeout)

    async def calculate_similarity(self, vector_a: list[float], vector_b: list[float], timeout: float = 5.0) -> float:
        return await self._send("calculate_similarity", {"vector_a": vector_a, "vector_b": vector_b}, timeout)

    async def aclose(self) -> None:
        if self._loop is None:
            return
        if self.is_ready() and self._worker.alive:
            try:
                await self._send("unload", {}, 5.0)
            except SemanticUnavailableError as exc:
                logger.debug("embedding_worker_unload_failed error=%s", exc)
        await asyncio.to_thread(self._worker.stop)
        for future in self._pending.values():
            if not future.done():
                future.set_exception(SemanticUnavailableError("Embedding worker stopped."))
        self._pending.clear()
        if self._ready is not None and not self._ready.done():
            self._ready.cancel()
        self._ready = None
        self._loop = None
