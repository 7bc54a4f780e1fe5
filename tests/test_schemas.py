import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.normalize.resume import build_resume_content, build_resume_text  # noqa: E402
from atsmatch.schemas.keywords import ATSScore, Keyword  # noqa: E402
from atsmatch.schemas.resume import EducationItem, ExperienceItem, Resume, ResumeSections  # noqa: E402


class KeywordModelTests(unittest.TestCase):
    def test_normalized_key_is_derived_from_term(self):
        keyword = Keyword.model_validate({"term": " Node.js ", "category": "hard", "normalizedKey": "bogus"})
        self.assertEqual(keyword.term, "Node.js")
        self.assertEqual(keyword.normalized_key, "nodejs")
        self.assertEqual(keyword.model_dump(by_alias=True)["normalizedKey"], "nodejs")

    def test_term_constraints(self):
        with self.assertRaises(ValidationError):
            Keyword(term="two\nlines", category="hard")
        with self.assertRaises(ValidationError):
            Keyword(term="x" * 51, category="hard")
        with self.assertRaises(ValidationError):
            Keyword(term="   ", category="soft")
        with self.assertRaises(ValidationError):
            Keyword(term="Python", category="hard", importance=101)

    def test_missing_keywords_are_bounded(self):
        with self.assertRaises(ValidationError):
            ATSScore(score=50, missing_keywords=[str(index) for index in range(11)])
        with self.assertRaises(ValidationError):
            ATSScore(score=101)


class ResumeTextTests(unittest.TestCase):
    def setUp(self):
        self.resume = Resume(
            content="Raw text",
            sections=ResumeSections(
                summary="Backend engineer.",
                experience=[
                    ExperienceItem(
                        company="Acme",
                        position="Engineer",
                        start_date="2020",
                        description=["Built APIs."],
                    )
                ],
                education=[EducationItem(institution="State U", degree="BSc", field="Computer Science", end_date="2019")],
                skills=["Python", "Docker"],
            ),
        )

    def test_content_rendering(self):
        content = build_resume_content(self.resume)
        self.assertIn("Engineer | Acme", content)
        self.assertIn("• Built APIs.", content)
        self.assertIn("Python, Docker", content)
        self.assertIn("State U, BSc, Computer Science, 2019", content)
        self.assertTrue(content.startswith("Backend engineer."))

    def test_search_text_includes_every_field(self):
        text = build_resume_text(self.resume)
        for part in ("Raw text", "Backend engineer.", "Python", "Engineer", "Acme", "Built APIs.", "Computer Science"):
            self.assertIn(part, text)


if __name__ == "__main__":
    unittest.main()
