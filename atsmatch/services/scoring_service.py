from __future__ import annotations

import logging

import httpx

from atsmatch.core.config import Settings, settings as default_settings
from atsmatch.errors import (
    EmptyInputError,
    ExtractionFailedError,
    RemoteAuthError,
    RemoteExtractionError,
    RemoteQuotaError,
    SemanticUnavailableError,
)
from atsmatch.features.local_extraction import (
    build_local_extraction,
    keywords_from_semantic,
    merge_extractions,
    resume_keywords,
)
from atsmatch.features.matcher import score
from atsmatch.normalize.job_description import parse_and_filter_job_description
from atsmatch.normalize.resume import build_resume_text
from atsmatch.schemas.keywords import ExtractionResult, ExtractionStrategy, ScoreReport, ScoreWarning
from atsmatch.schemas.resume import JobPosting, Resume
from atsmatch.semantic.worker import ProviderFactory, SemanticKeywordExtractor, sentence_transformer_factory
from atsmatch.services.remote_extractor import RemoteKeywordCache, extract_remote_cached

logger = logging.getLogger(__name__)


class ExtractionContext:
    """Session state shared by scoring calls.

    Owns the remote-result cache, the shared HTTP client and the optional
    semantic worker. Semantic extraction can be switched off once and stays off.
    """

    def __init__(
        self,
        cfg: Settings | None = None,
        *,
        cache: RemoteKeywordCache | None = None,
        http_client: httpx.AsyncClient | None = None,
        semantic: SemanticKeywordExtractor | None = None,
    ) -> None:
        self.settings = cfg or default_settings
        self.cache = cache or RemoteKeywordCache(
            ttl_s=self.settings.remote_cache_ttl_s,
            max_entries=self.settings.remote_cache_max_entries,
        )
        self.http_client = http_client
        self.semantic = semantic
        self._semantic_enabled = semantic is not None

    @classmethod
    def from_settings(
        cls,
        cfg: Settings | None = None,
        *,
        provider_factory: ProviderFactory | None = None,
    ) -> "ExtractionContext":
        cfg = cfg or default_settings
        semantic = None
        if cfg.enable_semantic:
            semantic = SemanticKeywordExtractor(
                provider_factory or sentence_transformer_factory(cfg.semantic_model_name),
                mailbox_size=cfg.semantic_mailbox_size,
                ready_timeout_s=cfg.semantic_ready_timeout_s,
                request_timeout_s=cfg.semantic_request_timeout_s,
            )
        return cls(cfg, http_client=httpx.AsyncClient(), semantic=semantic)

    @property
    def remote_enabled(self) -> bool:
        return self.settings.enable_remote and bool(self.settings.keyword_extraction_url)

    @property
    def semantic_enabled(self) -> bool:
        return self._semantic_enabled

    def disable_semantic(self, reason: str) -> None:
        if self._semantic_enabled:
            logger.warning("semantic_extraction_disabled reason=%s", reason)
        self._semantic_enabled = False

    def start(self) -> None:
        if self.semantic is not None and self._semantic_enabled:
            self.semantic.start()

    async def aclose(self) -> None:
        if self.semantic is not None:
            await self.semantic.aclose()
        if self.http_client is not None:
            await self.http_client.aclose()
        self.cache.clear()


async def _try_remote(
    text: str,
    context: ExtractionContext,
    auth_token: str | None,
    warnings: list[ScoreWarning],
) -> ExtractionResult | None:
    cfg = context.settings
    try:
        result = await extract_remote_cached(
            text,
            context.cache,
            auth_token,
            timeout=cfg.remote_timeout_s,
            max_retries=cfg.remote_max_retries,
            url=cfg.keyword_extraction_url,
            anon_key=cfg.keyword_extraction_anon_key,
            client=context.http_client,
        )
    except (RemoteAuthError, RemoteQuotaError) as exc:
        logger.warning("remote_extraction_rejected code=%s falling_back=local", exc.code)
        warnings.append(ScoreWarning(code=exc.code, message=str(exc)))
        return None
    except RemoteExtractionError as exc:
        logger.warning("remote_extraction_unavailable code=%s error=%s falling_back=local", exc.code, exc)
        return None
    if result.is_empty():
        logger.warning("remote_extraction_empty falling_back=local")
        return None
    return result


async def _try_semantic(text: str, context: ExtractionContext) -> ExtractionResult | None:
    if context.semantic is None or not context.semantic_enabled:
        return None
    cfg = context.settings
    try:
        hits = await context.semantic.extract(
            text,
            top_n=cfg.semantic_top_n,
            min_score=cfg.semantic_min_score,
            timeout=cfg.semantic_request_timeout_s,
        )
    except SemanticUnavailableError as exc:
        context.disable_semantic(f"{exc.code}: {exc}")
        return None
    return keywords_from_semantic(text, [(hit.keyword, hit.importance) for hit in hits])


def _try_rules(text: str) -> ExtractionResult | None:
    try:
        return build_local_extraction(text)
    except Exception as exc:  # noqa: BLE001 - the remaining strategies still run
        logger.exception("rule_extraction_failed error=%s", exc)
        return None


async def extract_job_keywords(
    text: str,
    *,
    context: ExtractionContext,
    auth_token: str | None = None,
    prefer_local: bool | None = None,
    warnings: list[ScoreWarning] | None = None,
) -> tuple[ExtractionResult, ExtractionStrategy]:
    """Remote first when enabled, else rule-based extraction supplemented by semantic hits."""
    if not text or not text.strip():
        raise EmptyInputError("Job description is empty.")
    warnings = warnings if warnings is not None else []
    local_only = context.settings.prefer_local if prefer_local is None else prefer_local

    if context.remote_enabled and not local_only:
        remote = await _try_remote(text, context, auth_token, warnings)
        if remote is not None:
            return remote, "remote"

    rules = _try_rules(text)
    semantic = await _try_semantic(parse_and_filter_job_description(text), context)

    if semantic is not None and rules is not None:
        return merge_extractions(semantic, rules), "semantic+rules"
    if rules is not None:
        return rules, "rules"
    if semantic is not None:
        return semantic, "semantic"
    raise ExtractionFailedError("Keyword extraction failed with every available strategy.")


async def calculate_ats_score(
    resume: Resume,
    job: JobPosting | str,
    *,
    context: ExtractionContext,
    auth_token: str | None = None,
    prefer_local: bool | None = None,
) -> ScoreReport:
    job_text = job.description if isinstance(job, JobPosting) else job
    if not job_text or not job_text.strip():
        raise EmptyInputError("Job description is empty.")
    resume_text = build_resume_text(resume)
    if not resume_text.strip():
        raise EmptyInputError("Resume text is empty.")

    warnings: list[ScoreWarning] = []
    job_keywords, strategy = await extract_job_keywords(
        job_text,
        context=context,
        auth_token=auth_token,
        prefer_local=prefer_local,
        warnings=warnings,
    )
    if job_keywords.is_empty():
        logger.info("job_keywords_empty strategy=%s", strategy)

    resume_terms = resume_keywords(resume_text)
    ats_score = score(
        [keyword.term for keyword in job_keywords.hard_skills],
        [keyword.term for keyword in job_keywords.soft_skills],
        resume_terms,
    )
    logger.info(
        "ats_score_calculated score=%s strategy=%s matched=%s missing=%s warnings=%s",
        ats_score.score,
        strategy,
        len(ats_score.matched_keywords),
        len(ats_score.missing_keywords),
        len(warnings),
    )
    return ScoreReport(ats_score=ats_score, strategy=strategy, job_keywords=job_keywords, warnings=warnings)
