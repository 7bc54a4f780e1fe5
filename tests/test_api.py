import os
import sys
import unittest
from dataclasses import replace
from pathlib import Path
from unittest.mock import AsyncMock, patch

# Keep API tests deterministic and offline.
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("ATS_ENABLE_REMOTE", "0")
os.environ.setdefault("ATS_ENABLE_SEMANTIC", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from atsmatch.core.config import settings  # noqa: E402
from atsmatch.main import app  # noqa: E402

RESUME = {
    "id": "resume-1",
    "name": "Backend Resume",
    "content": "Python developer. Docker. Communication.",
    "sections": {
        "summary": "Driven professional.",
        "experience": [
            {
                "id": "exp-1",
                "company": "Acme",
                "position": "Engineer",
                "startDate": "2020",
                "endDate": "2023",
                "description": ["Was responsible for team delivery.", "Call me at +1 555 222 1111 for references"],
            }
        ],
        "skills": ["Python", "Docker"],
    },
}
JOB = {
    "id": "job-1",
    "title": "Backend Engineer",
    "description": "Requirements\nPython, Docker and Kubernetes are required.\nStrong communication and leadership.",
    "source": "linkedin",
}


def suggestion(original, replacement, section="experience"):
    return {
        "id": "s-1",
        "type": "action_verb",
        "original": original,
        "suggestion": replacement,
        "rationale": "test",
        "section": section,
        "confidence": 0.8,
    }


class ApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client_manager = TestClient(app)
        cls.client = cls.client_manager.__enter__()

    @classmethod
    def tearDownClass(cls):
        cls.client_manager.__exit__(None, None, None)

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_ats_score(self):
        response = self.client.post("/v1/ats-score", json={"resume": RESUME, "job": JOB, "preferLocal": True})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["strategy"], "rules")
        self.assertEqual(body["atsScore"]["score"], 60)
        self.assertIn("Kubernetes", body["atsScore"]["missingKeywords"])
        self.assertIn("hardSkills", body["atsScore"]["analysis"])

    def test_ats_score_empty_job(self):
        job = dict(JOB, description="   ")
        response = self.client.post("/v1/ats-score", json={"resume": RESUME, "job": job})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"]["code"], "empty_input")

    def test_local_keyword_extraction(self):
        response = self.client.post("/v1/keywords/extract", json={"text": JOB["description"]})
        self.assertEqual(response.status_code, 200)
        terms = [item["term"] for item in response.json()["hardSkills"]]
        self.assertIn("Python", terms)
        self.assertEqual(self.client.post("/v1/keywords/extract", json={"text": " "}).status_code, 400)

    def test_suggestions(self):
        response = self.client.post(
            "/v1/suggestions",
            json={"text": "was responsible for team delivery", "section": "experience"},
        )
        self.assertEqual(response.status_code, 200)
        ids = [item["id"] for item in response.json()]
        self.assertEqual(ids, ["experience-0-capitalize", "experience-0-weak-verb", "experience-0-quantify"])

    def test_apply_one(self):
        response = self.client.post(
            "/v1/suggestions/apply-one",
            json={"resume": RESUME, "suggestion": suggestion("Was responsible for team delivery.", "Led team delivery.")},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["sections"]["experience"][0]["description"][0], "Led team delivery.")

    def test_apply_one_rejects_unsafe_and_missing(self):
        unsafe = suggestion("Call me at +1 555 222 1111 for references", "Call me for references")
        response = self.client.post("/v1/suggestions/apply-one", json={"resume": RESUME, "suggestion": unsafe})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["detail"]["dropped"], ["+1 555 222 1111"])

        missing = suggestion("Nothing like this", "Anything")
        response = self.client.post("/v1/suggestions/apply-one", json={"resume": RESUME, "suggestion": missing})
        self.assertEqual(response.status_code, 404)

    def test_apply_bulk(self):
        response = self.client.post(
            "/v1/suggestions/apply",
            json={
                "resume": RESUME,
                "suggestions": [
                    suggestion("Was responsible for team delivery.", "Led team delivery."),
                    suggestion("Call me at +1 555 222 1111 for references", "Call me for references"),
                ],
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["applied"], ["s-1"])
        self.assertEqual(body["rejected"][0]["code"], "suggestion_unsafe")

    def test_llm_keyword_extraction(self):
        envelope = {"success": True, "data": {"hardSkills": []}, "meta": {"tokensUsed": 12, "model": "test"}}
        with patch("atsmatch.core.security.settings", replace(settings, api_key=None)), patch(
            "atsmatch.api.v1.keywords.extract_keywords_llm",
            AsyncMock(return_value=envelope),
        ):
            response = self.client.post("/v1/keyword-extraction", json={"jobDescription": "Python role"})
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json()["meta"]["tokensUsed"], 12)

            response = self.client.post("/v1/keyword-extraction", json={"jobDescription": "  "})
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["detail"], {"error": "Job description is required"})

    def test_llm_keyword_extraction_requires_api_key(self):
        with patch("atsmatch.core.security.settings", replace(settings, api_key="secret")):
            response = self.client.post("/v1/keyword-extraction", json={"jobDescription": "Python role"})
            self.assertEqual(response.status_code, 401)
            with patch(
                "atsmatch.api.v1.keywords.extract_keywords_llm",
                AsyncMock(return_value={"success": True, "data": {}, "meta": {}}),
            ):
                response = self.client.post(
                    "/v1/keyword-extraction",
                    json={"jobDescription": "Python role"},
                    headers={"Authorization": "Bearer secret"},
                )
                self.assertEqual(response.status_code, 200)

    def test_panel_messages(self):
        response = self.client.post(
            "/v1/messages",
            json={"type": "generate_suggestions", "payload": {"text": "did stuff", "section": "experience"}},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["ok"])
        self.assertNotIn("score", body)
        self.assertEqual(len(body["suggestions"]), 3)

        response = self.client.post("/v1/messages", json={"type": "unknown", "payload": {}})
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
