from .categorizer import CategorizedKeywords, categorize, categorize_all
from .context_annotator import KeywordContext, annotate
from .keyword_extractor import extract, extract_with_frequency
from .local_extraction import build_local_extraction, merge_extractions
from .matcher import keywords_match, score, score_extractions, suggest_keywords
from .resume_updater import apply_edit_suggestion, apply_edit_suggestions, check_suggestion_safety
from .suggestions import generate_edit_suggestions

__all__ = [
    "CategorizedKeywords",
    "categorize",
    "categorize_all",
    "KeywordContext",
    "annotate",
    "extract",
    "extract_with_frequency",
    "build_local_extraction",
    "merge_extractions",
    "keywords_match",
    "score",
    "score_extractions",
    "suggest_keywords",
    "apply_edit_suggestion",
    "apply_edit_suggestions",
    "check_suggestion_safety",
    "generate_edit_suggestions",
]
