from .embeddings import EmbeddingProvider, SentenceTransformerProvider, SimpleEmbeddingProvider, cosine_similarity
from .extractor import SemanticKeyword, rank_candidates, rescale_scores
from .worker import EmbeddingWorker, SemanticKeywordExtractor, sentence_transformer_factory

__all__ = [
    "EmbeddingProvider",
    "SentenceTransformerProvider",
    "SimpleEmbeddingProvider",
    "cosine_similarity",
    "SemanticKeyword",
    "rank_candidates",
    "rescale_scores",
    "EmbeddingWorker",
    "SemanticKeywordExtractor",
    "sentence_transformer_factory",
]
