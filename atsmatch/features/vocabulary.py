"""Word lists for the rule-based keyword extractor."""

from __future__ import annotations

STOP_WORDS: frozenset[str] = frozenset(
    {
        # Articles, pronouns, determiners
        "a", "an", "the", "i", "me", "my", "we", "us", "our", "you", "your", "he", "she", "it",
        "its", "his", "her", "their", "they", "them", "these", "those", "this", "that", "which",
        "what", "who", "whom", "whose", "where", "when", "how", "why", "each", "every", "both",
        "few", "many", "much", "some", "any", "all", "most", "other", "another", "such", "than",
        "then", "there", "here",
        # Modals / auxiliaries
        "is", "are", "was", "were", "be", "been", "being", "am", "do", "does", "did", "will",
        "must", "have", "has", "had", "can", "could", "would", "should", "shall", "may", "might",
        "not", "no", "also", "too", "very", "just", "only", "even", "still", "yet", "already",
        "always", "never", "often", "well",
        # Prepositions / conjunctions
        "and", "or", "but", "nor", "so", "if", "as", "at", "by", "in", "of", "on", "to", "up",
        "for", "from", "into", "onto", "with", "within", "without", "about", "above", "after",
        "before", "between", "during", "under", "over", "through", "once", "until", "while",
        "since", "because", "although", "though", "whether", "either", "neither", "again",
        "further", "per", "via", "across", "around", "along", "including",
        # Generic verbs and adjectives that are never skills
        "get", "make", "take", "give", "come", "find", "keep", "let", "put", "say", "see", "want",
        "like", "need", "needs", "help", "try", "show", "become", "include", "includes", "join",
        "able", "new", "own", "best", "strong", "excellent", "good", "great", "various",
        "multiple", "ideal", "plus", "etc",
        # Posting structural filler
        "job", "role", "work", "working", "using", "use", "ability", "required", "preferred",
        "skills", "skill", "responsibilities", "requirements", "qualifications",
    }
)

# Generic nouns rejected as single-word keywords.
GENERIC_NOISE_WORDS: frozenset[str] = frozenset(
    {
        "team", "teams", "client", "clients", "industry", "company", "companies", "business",
        "opportunity", "opportunities", "candidate", "candidates", "position", "environment",
        "people", "world", "members", "member", "year", "years", "day", "days", "time", "part",
        "level", "status", "salary", "benefits", "applicants", "employer", "employees",
        "culture", "mission", "values", "experience", "knowledge", "understanding", "things",
        "degree", "related", "field", "location", "type", "full", "remote", "today", "including",
    }
)

# Adjectives that may open a multi-word technical phrase.
TECHNICAL_ADJECTIVES: frozenset[str] = frozenset(
    {
        "continuous", "distributed", "test-driven", "data-driven", "automated", "scalable",
        "cloud", "agile", "real-time", "object-oriented", "full-stack", "front-end", "back-end",
        "end-to-end", "cross-functional", "relational", "responsive", "deep", "machine",
        "natural", "unit", "integration", "embedded", "serverless",
    }
)

# Role nouns allowed to close a phrase ("software engineer", "data analyst").
ROLE_NOUNS: frozenset[str] = frozenset(
    {
        "engineer", "developer", "manager", "designer", "analyst", "architect", "scientist",
        "administrator", "specialist", "consultant", "associate",
    }
)

# Multi-word technical terms extracted as atomic units before word splitting.
CRITICAL_PHRASES: tuple[str, ...] = (
    "continuous integration",
    "continuous delivery",
    "continuous deployment",
    "test-driven development",
    "react native",
    "unit testing",
    "integration testing",
    "automated testing",
    "machine learning",
    "deep learning",
    "natural language processing",
    "computer vision",
    "data analysis",
    "data science",
    "data engineering",
    "distributed systems",
    "cloud computing",
    "version control",
    "object-oriented programming",
    "rest api",
    "rest apis",
    "ruby on rails",
    "amazon web services",
    "google cloud platform",
    "project management",
    "product management",
    "customer service",
    "point of sale",
    "problem solving",
    "problem-solving",
    "critical thinking",
    "time management",
    "attention to detail",
    "stakeholder management",
    "microsoft office",
    "user experience",
    "quality assurance",
)

# Posting boilerplate that never yields a keyword.
BOILERPLATE_PHRASES: tuple[str, ...] = (
    "about us",
    "about the company",
    "equal opportunity",
    "opportunity employer",
    "all qualified applicants",
    "without regard to",
    "sexual orientation",
    "gender identity",
    "national origin",
    "veteran status",
    "reasonable accommodation",
    "we are a leading",
    "leading company",
    "benefits include",
    "what we offer",
    "apply now",
    "click here",
    "privacy policy",
    "e-verify",
    "job type",
    "competitive salary",
    "who we are",
    "our mission",
    "our values",
)
