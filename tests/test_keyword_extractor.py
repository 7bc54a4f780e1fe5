import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.features.keyword_extractor import (  # noqa: E402
    extract,
    extract_critical_phrases,
    extract_with_frequency,
    is_valid_phrase,
    is_valid_word,
    rank_by_frequency,
    single_occurrence_cap,
)


class KeywordExtractorTests(unittest.TestCase):
    def test_boilerplate_is_filtered(self):
        text = (
            "About Us\nWe are a leading company that builds retail software.\n\n"
            "Requirements\nPython and Docker experience."
        )
        terms = extract(text)
        self.assertTrue(terms)
        for term in terms:
            self.assertNotIn("about us", term.lower())
            self.assertNotIn("leading company", term.lower())

    def test_rejects_malformed_candidates(self):
        text = "Python\n" + ("x" * 60) + "\nKubernetes operators\nGo"
        terms = extract(text)
        for term in terms:
            self.assertNotIn("\n", term)
            self.assertLessEqual(len(term), 50)
        self.assertNotIn("x" * 60, terms)
        self.assertIn("Go", terms)

    def test_frequent_terms_are_kept_and_ranked_first(self):
        text = "Docker Docker Docker. Python Python. Kubernetes."
        terms = extract(text)
        self.assertEqual(terms[0], "Docker")
        self.assertEqual(terms[1], "Python")
        self.assertIn("Kubernetes", terms)

    def test_single_occurrence_technical_term_survives(self):
        text = "We use Python daily. Python services. Python scripts. Experience with Kubernetes is required."
        terms = extract(text)
        self.assertIn("Python", terms)
        self.assertIn("Kubernetes", terms)

    def test_critical_phrases_are_extracted_whole(self):
        found, remaining = extract_critical_phrases("Strong unit testing and continuous integration habits")
        self.assertEqual([candidate.term for candidate in found], ["unit testing", "continuous integration"])
        self.assertNotIn("continuous", remaining)
        terms = extract("Strong unit testing and continuous integration habits")
        self.assertIn("continuous integration", terms)
        self.assertNotIn("continuous", terms)

    def test_phrase_and_word_validity(self):
        self.assertFalse(is_valid_phrase("with Python"))
        self.assertFalse(is_valid_phrase("the team"))
        self.assertTrue(is_valid_phrase("distributed systems"))
        self.assertTrue(is_valid_phrase("software engineer"))
        self.assertTrue(is_valid_word("Go"))
        self.assertTrue(is_valid_word("C#"))
        self.assertFalse(is_valid_word("team"))
        self.assertFalse(is_valid_word("is"))
        self.assertFalse(is_valid_word("2024"))

    def test_repeated_and_conjoined_phrases_are_rejected(self):
        self.assertFalse(is_valid_phrase("Python Python Python"))
        self.assertFalse(is_valid_phrase("C++ and C#"))
        self.assertFalse(is_valid_phrase("Docker or Podman"))
        self.assertFalse(is_valid_phrase("company in retail"))
        self.assertTrue(is_valid_phrase("data pipelines"))

        terms = extract("Python Python Python.\nC++ and C# are required.\nWe are a company in retail.")
        self.assertIn("Python", terms)
        self.assertIn("C++", terms)
        self.assertIn("C#", terms)
        for term in terms:
            self.assertNotIn(" and ", term)
            self.assertNotEqual(term.lower(), "python python python")
            self.assertNotIn("company in", term.lower())

    def test_single_occurrence_cap_is_configurable(self):
        self.assertEqual(single_occurrence_cap(0), 50)
        self.assertEqual(single_occurrence_cap(20), 60)
        ranked = rank_by_frequency(["alpha", "beta", "gamma", "beta"], single_cap=1)
        self.assertEqual(ranked, [("beta", 2), ("alpha", 1)])

    def test_frequency_is_reported_by_normalized_key(self):
        ranked = dict(extract_with_frequency("Node.js services. NodeJS workers. nodejs tooling."))
        self.assertEqual(ranked.get("Node.js"), 3)

    def test_empty_text_yields_nothing(self):
        self.assertEqual(extract(""), [])
        self.assertEqual(extract("   \n  "), [])


if __name__ == "__main__":
    unittest.main()
