import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.types import RawModelOutput  # noqa: E402
from app.core.errors import UnparsableOutput  # noqa: E402
from app.services.job_ad_resolver import resolve  # noqa: E402

FULL_OUTPUT = {
    "summary": "Solide Anzeige mit klarer Rolle, aber wenig Benefits.",
    "strengths": ["Klare Aufgaben", "Standort genannt"],
    "issues": ["Keine Gehaltsangabe"],
    "suggestions": ["Gehaltsspanne ergänzen", "Hook für Social Media formulieren"],
    "improvedAd": "Junior Accountant (m/w/d) in Hamburg ...",
    "score": {
        "overall": 68,
        "clarity": 74,
        "attractiveness": 55,
        "structure": 70,
        "social_media_effectiveness": 41.5,
    },
}


def _resolve(payload) -> dict:
    text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    return resolve(RawModelOutput(text=text)).model_dump()


class ResponseResolverTests(unittest.TestCase):
    def test_complete_output_passes_through_unchanged(self):
        self.assertEqual(_resolve(FULL_OUTPUT), FULL_OUTPUT)

    def test_missing_fields_default_without_touching_others(self):
        payload = json.loads(json.dumps(FULL_OUTPUT))
        del payload["strengths"]
        del payload["score"]["clarity"]

        result = _resolve(payload)

        self.assertEqual(result["strengths"], [])
        self.assertIsNone(result["score"]["clarity"])
        self.assertEqual(result["summary"], FULL_OUTPUT["summary"])
        self.assertEqual(result["issues"], FULL_OUTPUT["issues"])
        self.assertEqual(result["suggestions"], FULL_OUTPUT["suggestions"])
        self.assertEqual(result["improvedAd"], FULL_OUTPUT["improvedAd"])
        self.assertEqual(result["score"]["overall"], 68)
        self.assertEqual(result["score"]["social_media_effectiveness"], 41.5)

    def test_empty_object_yields_canonical_shape(self):
        self.assertEqual(
            _resolve({}),
            {
                "summary": "",
                "strengths": [],
                "issues": [],
                "suggestions": [],
                "improvedAd": "",
                "score": None,
            },
        )

    def test_mistyped_fields_fall_back_to_defaults(self):
        result = _resolve(
            {
                "summary": ["not", "a", "string"],
                "strengths": "Klare Aufgaben",
                "issues": ["Keine Benefits", 3, None],
                "suggestions": None,
                "improvedAd": 12,
                "score": "85/100",
            }
        )
        self.assertEqual(result["summary"], "")
        self.assertEqual(result["strengths"], [])
        self.assertEqual(result["issues"], ["Keine Benefits"])
        self.assertEqual(result["suggestions"], [])
        self.assertEqual(result["improvedAd"], "")
        self.assertIsNone(result["score"])

    def test_partial_score_keeps_numeric_values_only(self):
        result = _resolve({"summary": "ok", "score": {"overall": 80, "clarity": "high", "structure": True}})
        self.assertEqual(
            result["score"],
            {
                "overall": 80,
                "clarity": None,
                "attractiveness": None,
                "structure": None,
                "social_media_effectiveness": None,
            },
        )

    def test_null_score_stays_null(self):
        self.assertIsNone(_resolve({"summary": "ok", "score": None})["score"])

    def test_code_fenced_json_is_accepted(self):
        text = "```json\n" + json.dumps({"summary": "Gut"}) + "\n```"
        self.assertEqual(_resolve(text)["summary"], "Gut")

    def test_json_surrounded_by_prose_is_accepted(self):
        text = 'Hier ist die Analyse: {"summary": "Gut", "issues": ["Zu lang"]} Viel Erfolg!'
        result = _resolve(text)
        self.assertEqual(result["summary"], "Gut")
        self.assertEqual(result["issues"], ["Zu lang"])

    def test_first_object_is_kept_when_more_braces_follow(self):
        text = 'Ergebnis: {"summary": "a"} Beispiel: {"x": 1}'
        self.assertEqual(_resolve(text)["summary"], "a")

    def test_leading_non_json_braces_are_skipped(self):
        text = 'Vorlage {Titel} ausgefüllt: {"summary": "b", "strengths": ["Klar"]}'
        result = _resolve(text)
        self.assertEqual(result["summary"], "b")
        self.assertEqual(result["strengths"], ["Klar"])

    def test_oversized_integer_score_becomes_null(self):
        text = '{"summary": "ok", "score": {"overall": ' + "9" * 400 + ', "clarity": 70}}'
        result = _resolve(text)
        self.assertIsNone(result["score"]["overall"])
        self.assertEqual(result["score"]["clarity"], 70)

    def test_prose_without_braces_is_unparsable(self):
        text = "Die Anzeige ist insgesamt gut, aber zu lang."
        with self.assertRaises(UnparsableOutput) as ctx:
            resolve(RawModelOutput(text=text))
        self.assertEqual(ctx.exception.raw_text, text)

    def test_empty_and_non_object_json_are_unparsable(self):
        for text in ("", "   ", "[1, 2, 3]", '"summary"', "null", "{broken"):
            with self.subTest(text=text):
                with self.assertRaises(UnparsableOutput):
                    resolve(RawModelOutput(text=text))


if __name__ == "__main__":
    unittest.main()
