import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.features.context_annotator import (  # noqa: E402
    annotate,
    compute_importance,
    count_occurrences,
    detect_requirement_level,
    detect_section,
    find_first_occurrence,
    locate_sections,
)


class ImportanceTests(unittest.TestCase):
    def test_importance_arithmetic(self):
        self.assertEqual(compute_importance("required", "requirements", 1), 100)
        self.assertEqual(compute_importance("neutral", "company", 1), 40)
        self.assertEqual(compute_importance("preferred", "unknown", 3), 75)
        self.assertEqual(compute_importance("neutral", "unknown", 10), 70)
        self.assertEqual(compute_importance("neutral", "unknown", 1, whitelisted=True), 60)

    def test_importance_is_clamped(self):
        self.assertEqual(compute_importance("required", "requirements", 5, whitelisted=True), 100)


class RequirementLevelTests(unittest.TestCase):
    def test_cue_priority(self):
        text = "Docker is a plus"
        self.assertEqual(detect_requirement_level(text, 0, 6), "preferred")
        text = "Exposure to Terraform"
        self.assertEqual(detect_requirement_level(text, text.index("Terraform"), 9), "optional")
        text = "Must have Python, Go a plus"
        self.assertEqual(detect_requirement_level(text, text.index("Python"), 6), "required")
        self.assertEqual(detect_requirement_level("We like Rust", 8, 4), "neutral")

    def test_missing_keyword_is_neutral(self):
        self.assertEqual(detect_requirement_level("anything required", -1), "neutral")


class SectionTests(unittest.TestCase):
    TEXT = "Requirements\nPython\n\nPreferred Qualifications:\nGo\n\nBenefits\nSnacks"

    def test_locate_sections(self):
        headers = locate_sections(self.TEXT)
        self.assertEqual([header.kind for header in headers], ["requirements", "preferred", "company"])
        self.assertEqual(headers[0].position, 0)

    def test_detect_section(self):
        headers = locate_sections(self.TEXT)
        self.assertEqual(detect_section(headers, self.TEXT.index("Python")), "requirements")
        self.assertEqual(detect_section(headers, self.TEXT.index("Go")), "preferred")
        self.assertEqual(detect_section(headers, self.TEXT.index("Snacks")), "company")
        self.assertEqual(detect_section(headers, -1), "unknown")
        self.assertEqual(detect_section(locate_sections("Python and Go"), 0), "unknown")


class AnnotateTests(unittest.TestCase):
    def test_company_section_term_is_penalised(self):
        text = "About Us\nWe partner with Salesforce to serve retail brands."
        context = annotate(text, "Salesforce")
        self.assertEqual(context.requirement_level, "neutral")
        self.assertEqual(context.section, "company")
        self.assertEqual(context.importance, 40)

    def test_required_term_in_requirements(self):
        text = "Requirements\n5+ years of Python experience required."
        context = annotate(text, "Python")
        self.assertEqual(context.requirement_level, "required")
        self.assertEqual(context.section, "requirements")
        self.assertEqual(context.importance, 100)

    def test_occurrences_respect_word_boundaries(self):
        text = "Java and JavaScript. java again."
        self.assertEqual(count_occurrences(text, "Java"), 2)
        self.assertEqual(find_first_occurrence(text, "JavaScript"), 9)
        self.assertEqual(find_first_occurrence(text, "Rust"), -1)
        self.assertEqual(count_occurrences(text, "  "), 0)


if __name__ == "__main__":
    unittest.main()
