import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.features.suggestions import (  # noqa: E402
    QUANTIFY_HINT,
    choose_strong_verb,
    generate_edit_suggestions,
)


class EditSuggestionTests(unittest.TestCase):
    def test_experience_bullet_gets_all_applicable_checks(self):
        suggestions = generate_edit_suggestions("was responsible for team delivery", "experience")
        self.assertEqual(
            [item.id for item in suggestions],
            ["experience-0-capitalize", "experience-0-weak-verb", "experience-0-quantify"],
        )
        weak = suggestions[1]
        self.assertEqual(weak.type, "action_verb")
        self.assertEqual(weak.suggestion, "led team delivery")
        self.assertEqual(suggestions[2].suggestion, "was responsible for team delivery" + QUANTIFY_HINT)

    def test_weak_verb_keeps_capitalization(self):
        suggestions = generate_edit_suggestions("Was responsible for team delivery.", "experience")
        weak = [item for item in suggestions if item.type == "action_verb"]
        self.assertEqual(len(weak), 1)
        self.assertEqual(weak[0].original, "Was responsible for team delivery")
        self.assertEqual(weak[0].suggestion, "Led team delivery")

    def test_passive_voice(self):
        suggestions = generate_edit_suggestions("The API was designed by me", "summary")
        self.assertEqual(len(suggestions), 1)
        self.assertEqual(suggestions[0].type, "passive_voice")
        self.assertEqual(suggestions[0].suggestion, "The API designed by me")
        self.assertEqual(suggestions[0].confidence, 0.7)

    def test_spacing(self):
        suggestions = generate_edit_suggestions("Built  the  platform", "skills")
        self.assertEqual([item.id for item in suggestions], ["skills-0-spacing"])
        self.assertEqual(suggestions[0].suggestion, "Built the platform")

    def test_quantified_bullet_needs_nothing(self):
        self.assertEqual(generate_edit_suggestions("Increased revenue by 20%", "experience"), [])

    def test_results_are_ordered_and_capped(self):
        text = "\n".join(["did stuff"] * 12)
        suggestions = generate_edit_suggestions(text, "experience")
        self.assertEqual(len(suggestions), 10)
        confidences = [item.confidence for item in suggestions]
        self.assertEqual(confidences, sorted(confidences, reverse=True))
        self.assertEqual(len({item.id for item in suggestions}), 10)
        self.assertEqual(generate_edit_suggestions(text, "experience"), suggestions)

    def test_strong_verb_table(self):
        self.assertEqual(choose_strong_verb("worked on people ops"), "led")
        self.assertEqual(choose_strong_verb("helped with building tools"), "developed")
        self.assertEqual(choose_strong_verb("tried to enhance uptime"), "improved")
        self.assertEqual(choose_strong_verb("used research methods"), "analyzed")
        self.assertEqual(choose_strong_verb("had a budget"), "managed")

    def test_empty_text(self):
        self.assertEqual(generate_edit_suggestions("", "summary"), [])


if __name__ == "__main__":
    unittest.main()
