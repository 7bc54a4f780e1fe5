import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.core.scoring import reset_scoring_config  # noqa: E402
from atsmatch.features.matcher import keywords_match, score, score_extractions, suggest_keywords  # noqa: E402
from atsmatch.schemas.keywords import ExtractionResult, Keyword  # noqa: E402


class ScoreTests(unittest.TestCase):
    def test_perfect_match(self):
        result = score(["Python", "Docker"], ["communication"], ["python", "docker", "communication"])
        self.assertEqual(result.score, 100)
        self.assertEqual(result.missing_keywords, [])
        self.assertEqual(result.matched_keywords, ["Python", "Docker", "communication"])

    def test_zero_overlap(self):
        result = score(["Python"], ["leadership"], ["Cobol"])
        self.assertEqual(result.score, 0)
        self.assertEqual(result.missing_keywords, ["Python", "leadership"])

    def test_empty_category_credit(self):
        self.assertEqual(score(["Python"], [], ["Python"]).score, 80)
        self.assertEqual(score([], ["leadership"], ["Python"]).score, 30)
        self.assertEqual(score([], [], ["Python"]).score, 50)

    def test_synonym_groups_match(self):
        result = score(["CRM"], [], ["Salesforce"])
        self.assertEqual(result.score, 80)
        self.assertEqual(result.analysis.hard_skills.matched, ["CRM"])

    def test_adding_a_keyword_never_lowers_the_score(self):
        job_hard = ["Python", "Docker", "Kubernetes"]
        job_soft = ["leadership", "communication"]
        before = score(job_hard, job_soft, ["Python"])
        after = score(job_hard, job_soft, ["Python", "leadership"])
        self.assertEqual(before.score, 20)
        self.assertEqual(after.score, 40)

    def test_rounds_half_up(self):
        job_hard = ["Python", "Docker", "Kubernetes", "Terraform", "Redis", "Kafka", "Ansible", "Jenkins"]
        self.assertEqual(score(job_hard, [], ["Python"]).score, 28)

    def test_short_keys_need_exact_match(self):
        result = score(["Go"], [], ["Google Analytics"])
        self.assertEqual(result.missing_keywords, ["Go"])
        self.assertTrue(keywords_match("React", "ReactJS"))
        self.assertFalse(keywords_match("Go", "Google"))

    def test_job_keywords_are_deduplicated(self):
        result = score(["Node.js", "NodeJS", "Leadership"], ["leadership"], [])
        self.assertEqual(result.analysis.hard_skills.missing, ["Node.js", "Leadership"])
        self.assertEqual(result.analysis.soft_skills.missing, [])
        self.assertEqual(result.score, 20)

    def test_missing_keywords_are_capped(self):
        job_hard = [f"Tool{index}x" for index in range(15)]
        result = score(job_hard, [], [])
        self.assertEqual(len(result.missing_keywords), 10)
        self.assertEqual(len(result.analysis.hard_skills.missing), 15)
        self.assertEqual(suggest_keywords(result, limit=3), job_hard[:3])

    def test_missing_keyword_limit_follows_scoring_config(self):
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        handle.write("scoring:\n  missing_keywords_limit: 20\n")
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        self.addCleanup(reset_scoring_config)
        reset_scoring_config()
        job_hard = [f"Tool{index}x" for index in range(15)]
        with patch.dict(os.environ, {"ATS_SCORING_CONFIG": handle.name}):
            result = score(job_hard, [], [])
        self.assertEqual(result.missing_keywords, job_hard)

    def test_score_extractions(self):
        job = ExtractionResult(
            hard_skills=[Keyword(term="Python", category="hard")],
            soft_skills=[Keyword(term="mentoring", category="soft")],
        )
        resume = ExtractionResult(hard_skills=[Keyword(term="python", category="hard")])
        self.assertEqual(score_extractions(job, resume).score, 60)


if __name__ == "__main__":
    unittest.main()
