import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.normalize.job_description import parse_and_filter_job_description  # noqa: E402


class JobDescriptionFilterTests(unittest.TestCase):
    def test_requirement_blocks_come_first(self):
        text = "About Us\nWe are great.\n\nRequirements:\nPython\n\nWe offer snacks."
        self.assertEqual(
            parse_and_filter_job_description(text),
            "Requirements:\nPython\n\nWe offer snacks.\n\nAbout Us\nWe are great.",
        )

    def test_marker_words_promote_blocks(self):
        text = "Intro paragraph.\n\nStrong skills in SQL."
        self.assertEqual(parse_and_filter_job_description(text), "Strong skills in SQL.\n\nIntro paragraph.")

    def test_company_blocks_are_capped(self):
        text = "\n\n".join(["Benefits\nFree lunch"] * 5)
        filtered = parse_and_filter_job_description(text)
        self.assertEqual(filtered.count("Benefits"), 3)

    def test_empty_input(self):
        self.assertEqual(parse_and_filter_job_description(""), "")
        self.assertEqual(parse_and_filter_job_description("  \n\n "), "")


if __name__ == "__main__":
    unittest.main()
