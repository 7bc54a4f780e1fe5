import sys
import unittest
from dataclasses import replace
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from atsmatch.core.config import settings  # noqa: E402
from atsmatch.schemas.messages import (  # noqa: E402
    ApplySuggestionsMessage,
    CalculateScoreMessage,
    ExtractKeywordsMessage,
)
from atsmatch.services.dispatch import dispatch_message, parse_message  # noqa: E402
from atsmatch.services.scoring_service import ExtractionContext  # noqa: E402

RESUME = {"content": "Python developer. Docker. Communication.", "sections": {"summary": "Driven professional."}}


class ParseMessageTests(unittest.TestCase):
    def test_discriminates_on_type(self):
        message = parse_message({"type": "extract_keywords", "payload": {"text": "Python and Docker"}})
        self.assertIsInstance(message, ExtractKeywordsMessage)
        message = parse_message(
            {"type": "calculate_score", "payload": {"resume": RESUME, "job": {"description": "Python"}, "preferLocal": True}}
        )
        self.assertIsInstance(message, CalculateScoreMessage)
        self.assertTrue(message.payload.prefer_local)

    def test_rejects_unknown_or_malformed_messages(self):
        with self.assertRaises(ValidationError):
            parse_message({"type": "delete_everything", "payload": {}})
        with self.assertRaises(ValidationError):
            parse_message({"type": "extract_keywords", "payload": {"text": ""}})
        with self.assertRaises(ValidationError):
            parse_message({"type": "apply_suggestions", "payload": {"resume": RESUME, "suggestions": []}})


class DispatchMessageTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.context = ExtractionContext(replace(settings, enable_remote=False, enable_semantic=False))

    async def asyncTearDown(self):
        await self.context.aclose()

    async def test_calculate_score(self):
        message = parse_message(
            {
                "type": "calculate_score",
                "payload": {
                    "resume": RESUME,
                    "job": {"description": "Requirements\nPython and Rust required."},
                },
            }
        )
        response = await dispatch_message(message, context=self.context)
        self.assertTrue(response.ok)
        self.assertEqual(response.type, "calculate_score")
        self.assertEqual(response.score.strategy, "rules")

    async def test_errors_become_failed_responses(self):
        message = parse_message({"type": "calculate_score", "payload": {"resume": RESUME, "job": {"description": " "}}})
        response = await dispatch_message(message, context=self.context)
        self.assertFalse(response.ok)
        self.assertEqual(response.error.code, "empty_input")

    async def test_extract_keywords(self):
        message = parse_message({"type": "extract_keywords", "payload": {"text": "Python and Docker required"}})
        response = await dispatch_message(message, context=self.context)
        self.assertIn("Python", [keyword.term for keyword in response.keywords.hard_skills])

    async def test_apply_suggestions_reports_rejections(self):
        message = parse_message(
            {
                "type": "apply_suggestions",
                "payload": {
                    "resume": RESUME,
                    "suggestions": [
                        {
                            "id": "s-1",
                            "type": "clarity",
                            "original": "Not present",
                            "suggestion": "Anything",
                            "rationale": "test",
                            "section": "summary",
                            "confidence": 0.5,
                        }
                    ],
                },
            }
        )
        self.assertIsInstance(message, ApplySuggestionsMessage)
        response = await dispatch_message(message, context=self.context)
        self.assertTrue(response.ok)
        self.assertEqual(response.result.rejected[0].code, "suggestion_not_found")


if __name__ == "__main__":
    unittest.main()
