from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from atsmatch.errors import SuggestionNotFoundError, SuggestionSafetyError
from atsmatch.normalize.resume import build_resume_content
from atsmatch.normalize.utils import PHONE_RE, find_emails, find_numbers, find_phones, normalize_for_compare
from atsmatch.schemas.resume import Resume
from atsmatch.schemas.suggestions import BulkApplyResult, EditSuggestion, RejectedSuggestion, SafetyReport

logger = logging.getLogger(__name__)


def _flexible_pattern(original: str) -> re.Pattern[str]:
    # Case-insensitive and tolerant of whitespace differences inside the original text.
    words = original.split()
    return re.compile(r"\s+".join(re.escape(word) for word in words), re.IGNORECASE)


def _replace_once(text: str, suggestion: EditSuggestion) -> str | None:
    original = suggestion.original.strip()
    if not original:
        return None
    updated, count = _flexible_pattern(original).subn(lambda _: suggestion.suggestion.strip(), text, count=1)
    return updated if count else None


def _locate(text: str, original: str) -> bool:
    target = normalize_for_compare(original)
    current = normalize_for_compare(text)
    return bool(target) and (current == target or target in current)


def _not_found(suggestion: EditSuggestion, where: str) -> SuggestionNotFoundError:
    return SuggestionNotFoundError(
        f'Could not find "{suggestion.original.strip()}" in the {where} section.',
        suggestion_id=suggestion.id,
    )


def _apply_to_sections(resume: Resume, suggestion: EditSuggestion) -> Resume:
    sections = resume.sections.model_copy(deep=True)

    if suggestion.section == "summary":
        updated = _replace_once(sections.summary or "", suggestion)
        if updated is None:
            raise _not_found(suggestion, "summary")
        sections.summary = updated

    elif suggestion.section == "experience":
        for entry in sections.experience or []:
            index = next(
                (i for i, bullet in enumerate(entry.description) if _locate(bullet, suggestion.original)),
                None,
            )
            if index is None:
                continue
            updated = _replace_once(entry.description[index], suggestion)
            if updated is None:
                raise _not_found(suggestion, "experience")
            entry.description[index] = updated
            break
        else:
            raise _not_found(suggestion, "experience")

    elif suggestion.section == "skills":
        skills = sections.skills or []
        index = next((i for i, skill in enumerate(skills) if _locate(skill, suggestion.original)), None)
        updated = _replace_once(skills[index], suggestion) if index is not None else None
        if updated is None:
            raise _not_found(suggestion, "skills")
        skills[index] = updated

    else:
        raise _not_found(suggestion, suggestion.section)

    return resume.model_copy(update={"sections": sections})


def _next_timestamp(previous: datetime) -> datetime:
    now = datetime.now(timezone.utc)
    if previous.tzinfo is None:
        now = now.replace(tzinfo=None)
    return max(now, previous)


def apply_edit_suggestion(resume: Resume, suggestion: EditSuggestion) -> Resume:
    """Return a new resume with ``suggestion`` applied; the input is never mutated.

    Raises SuggestionNotFoundError when the original text cannot be located.
    """
    updated = _apply_to_sections(resume, suggestion)
    updated = updated.model_copy(
        update={
            "content": build_resume_content(updated),
            "updated_at": _next_timestamp(resume.updated_at),
        }
    )
    logger.info("suggestion_applied id=%s section=%s", suggestion.id, suggestion.section)
    return updated


def _dropped(before: list[str], after: list[str]) -> list[str]:
    remaining = list(after)
    dropped: list[str] = []
    for token in before:
        if token in remaining:
            remaining.remove(token)
        else:
            dropped.append(token)
    return dropped


def check_suggestion_safety(suggestion: EditSuggestion) -> SafetyReport:
    """Flag rewrites that lose numbers, email addresses or phone numbers from the original."""
    original, replacement = suggestion.original, suggestion.suggestion
    phones = _dropped(find_phones(original), find_phones(replacement))
    # Digits inside a phone number are reported through the phone, not twice.
    numbers = _dropped(find_numbers(_strip_phones(original)), find_numbers(_strip_phones(replacement)))
    emails = _dropped(
        [email.lower() for email in find_emails(original)],
        [email.lower() for email in find_emails(replacement)],
    )

    safe = not (numbers or emails or phones)
    message = ""
    if not safe:
        parts = []
        if numbers:
            parts.append("numbers " + ", ".join(numbers))
        if emails:
            parts.append("email addresses " + ", ".join(emails))
        if phones:
            parts.append("phone numbers " + ", ".join(phones))
        message = "Suggestion was not applied because it would remove " + "; ".join(parts) + " from your resume."
    return SafetyReport(
        suggestion_id=suggestion.id,
        safe=safe,
        dropped_numbers=numbers,
        dropped_emails=emails,
        dropped_phones=phones,
        message=message,
    )


def _strip_phones(text: str) -> str:
    return PHONE_RE.sub(" ", text or "")


def ensure_safe(suggestion: EditSuggestion) -> None:
    report = check_suggestion_safety(suggestion)
    if not report.safe:
        raise SuggestionSafetyError(
            report.message,
            suggestion_id=suggestion.id,
            dropped=[*report.dropped_numbers, *report.dropped_emails, *report.dropped_phones],
        )


def apply_edit_suggestions(
    resume: Resume,
    suggestions: list[EditSuggestion],
    *,
    safe: bool = True,
) -> BulkApplyResult:
    """Apply suggestions in order; rejected ones never touch the resume."""
    current = resume
    applied: list[str] = []
    rejected: list[RejectedSuggestion] = []
    for suggestion in suggestions:
        try:
            if safe:
                ensure_safe(suggestion)
            current = apply_edit_suggestion(current, suggestion)
        except (SuggestionSafetyError, SuggestionNotFoundError) as exc:
            logger.info("suggestion_rejected id=%s code=%s", suggestion.id, exc.code)
            rejected.append(RejectedSuggestion(suggestion_id=suggestion.id, code=exc.code, message=str(exc)))
            continue
        applied.append(suggestion.id)
    return BulkApplyResult(resume=current, applied=applied, rejected=rejected)
