import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.features.keyword_extractor import extract  # noqa: E402
from atsmatch.features.local_extraction import (  # noqa: E402
    build_local_extraction,
    extract_certifications,
    extract_experience_requirements,
    keywords_from_semantic,
    merge_extractions,
    resume_keywords,
)
from atsmatch.schemas.keywords import ExtractionResult, Keyword  # noqa: E402

JOB_POSTING = """Senior Backend Engineer

Requirements
5+ years of experience with Python.
Must have strong communication skills.
Experience with Docker and Kubernetes.
AWS Certified Solutions Architect preferred.

About Us
We are a leading company in retail."""


class ExperienceAndCertificationTests(unittest.TestCase):
    def test_experience_requirements(self):
        requirements = extract_experience_requirements("At least 3 years experience in SQL, and 2 yrs using Docker")
        self.assertEqual([(item.skill, item.years, item.is_minimum) for item in requirements], [
            ("SQL", 3, True),
            ("Docker", 2, False),
        ])

    def test_plus_marks_a_minimum(self):
        requirements = extract_experience_requirements("5+ years of experience with Python.")
        self.assertEqual(len(requirements), 1)
        self.assertEqual(requirements[0].skill, "Python")
        self.assertTrue(requirements[0].is_minimum)

    def test_certifications(self):
        self.assertEqual(
            extract_certifications("AWS Certified Solutions Architect preferred."),
            ["AWS Certified Solutions Architect"],
        )
        self.assertEqual(extract_certifications("SQL, PMP certification required"), ["PMP"])
        self.assertEqual(extract_certifications(""), [])


class LocalExtractionTests(unittest.TestCase):
    def test_job_posting_extraction(self):
        result = build_local_extraction(JOB_POSTING)
        hard = {keyword.term: keyword for keyword in result.hard_skills}
        soft = {keyword.term for keyword in result.soft_skills}

        self.assertIn("Python", hard)
        self.assertIn("Docker", hard)
        self.assertIn("Kubernetes", hard)
        self.assertIn("communication", soft)
        self.assertEqual(hard["Python"].requirement_level, "required")
        self.assertEqual(hard["Python"].section, "requirements")
        self.assertEqual(hard["Python"].importance, 100)
        self.assertEqual(hard["Python"].normalized_key, "python")
        self.assertEqual(result.certifications, ["AWS Certified Solutions Architect"])
        self.assertEqual(result.experience_requirements[0].skill, "Python")
        for keyword in [*result.hard_skills, *result.soft_skills]:
            self.assertNotIn("leading company", keyword.term.lower())

    def test_empty_text(self):
        self.assertTrue(build_local_extraction("").is_empty())

    def test_semantic_hits_are_categorized(self):
        result = keywords_from_semantic("We need Kubernetes", [("Kubernetes", 90), ("fun", 50)])
        self.assertEqual([keyword.term for keyword in result.hard_skills], ["Kubernetes"])
        self.assertEqual(result.hard_skills[0].importance, 90)
        self.assertEqual(result.soft_skills, [])

    def test_merge_prefers_semantic_terms(self):
        semantic = ExtractionResult(hard_skills=[Keyword(term="Kubernetes", category="hard", importance=90)])
        rules = ExtractionResult(
            hard_skills=[
                Keyword(term="Python", category="hard"),
                Keyword(term="kubernetes", category="hard"),
            ],
            certifications=["PMP"],
        )
        merged = merge_extractions(semantic, rules)
        self.assertEqual([keyword.term for keyword in merged.hard_skills], ["Kubernetes", "Python"])
        self.assertEqual(merged.hard_skills[0].importance, 90)
        self.assertEqual(merged.certifications, ["PMP"])

    def test_resume_keywords_are_uncapped(self):
        text = ", ".join(f"Tool{index}x" for index in range(60))
        self.assertEqual(len(resume_keywords(text)), 60)
        self.assertEqual(len(extract(text)), 50)


if __name__ == "__main__":
    unittest.main()
