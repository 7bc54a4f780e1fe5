from __future__ import annotations

import hashlib
import logging
import re
import threading
from typing import Any, Callable, Protocol, Sequence

import numpy as np

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9\+#]+")

ProgressCallback = Callable[[dict[str, Any]], None]


class EmbeddingProvider(Protocol):
    def embed(self, texts: list[str]) -> list[list[float]]:
        """One vector per input text, in input order."""


def _bucket(feature: str, dimension: int) -> int:
    digest = hashlib.blake2b(feature.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big") % dimension


class SimpleEmbeddingProvider(EmbeddingProvider):
    """Hashed token and character-trigram counts, L2-normalized.

    Deterministic and dependency-light; used in tests and when no model is
    available. Vectors are non-negative, so similarities fall in [0, 1].
    """

    def __init__(self, dimension: int = 64) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        self.dimension = dimension

    def _features(self, text: str) -> list[str]:
        features: list[str] = []
        for token in _TOKEN_RE.findall(text.lower()):
            features.append(f"w:{token}")
            padded = f"^{token}$"
            features.extend(f"c:{padded[i:i + 3]}" for i in range(len(padded) - 2))
        return features

    def embed(self, texts: list[str]) -> list[list[float]]:
        matrix = np.zeros((len(texts), self.dimension), dtype=np.float64)
        for row, text in enumerate(texts):
            for feature in self._features(text):
                matrix[row, _bucket(feature, self.dimension)] += 1.0
        norms = np.linalg.norm(matrix, axis=1, keepdims=True)
        np.divide(matrix, norms, out=matrix, where=norms > 0)
        return matrix.tolist()


class SentenceTransformerProvider(EmbeddingProvider):
    """Mean-pooled, normalized sentence embeddings.

    One model instance per name is shared for the process lifetime; concurrent
    first calls wait on the same load instead of racing.
    """

    _model_cache: dict[str, Any] = {}
    _loading_lock = threading.Lock()

    def __init__(self, model_name: str, progress_callback: ProgressCallback | None = None) -> None:
        self.model_name = model_name
        self._progress_callback = progress_callback

    @classmethod
    def _get_model(cls, model_name: str, progress_callback: ProgressCallback | None = None) -> Any:
        model = cls._model_cache.get(model_name)
        if model is not None:
            return model
        with cls._loading_lock:
            model = cls._model_cache.get(model_name)
            if model is not None:
                return model
            from sentence_transformers import SentenceTransformer

            if progress_callback:
                progress_callback({"file": model_name, "progress": 0.0, "status": "loading"})
            logger.info("embedding_model_loading model=%s", model_name)
            model = SentenceTransformer(model_name)
            cls._model_cache[model_name] = model
            if progress_callback:
                progress_callback({"file": model_name, "progress": 100.0, "status": "loaded"})
            logger.info("embedding_model_loaded model=%s", model_name)
            return model

    @classmethod
    def unload(cls, model_name: str) -> bool:
        with cls._loading_lock:
            return cls._model_cache.pop(model_name, None) is not None

    def load(self) -> None:
        self._get_model(self.model_name, self._progress_callback)

    def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        model = self._get_model(self.model_name, self._progress_callback)
        vectors = model.encode(texts, normalize_embeddings=True, convert_to_numpy=True)
        return np.asarray(vectors, dtype=np.float32).tolist()


def cosine_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    """Cosine of two vectors; 0.0 for mismatched lengths or zero vectors."""
    if len(left) != len(right):
        return 0.0
    a = np.asarray(left, dtype=np.float64)
    b = np.asarray(right, dtype=np.float64)
    denominator = float(np.linalg.norm(a) * np.linalg.norm(b))
    if denominator <= 0.0:
        return 0.0
    return float(np.dot(a, b) / denominator)
