import pytest

from fakenews_detector.errors import AIResponseError
from fakenews_detector.processors.ai.parsing import extract_json_object, parse_judgment_response, strip_code_fences

from .conftest import judgment_json


class TestExtraction:
    def test_strip_code_fences(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_first_balanced_object(self):
        raw = 'Here you go: {"a": {"b": 1}} and then {"c": 2}'
        assert extract_json_object(raw) == '{"a": {"b": 1}}'

    def test_braces_inside_strings_are_ignored(self):
        raw = '{"reasoning": "uses } and { freely \\" ok", "n": 1} trailing'
        assert extract_json_object(raw) == '{"reasoning": "uses } and { freely \\" ok", "n": 1}'

    def test_unbalanced_returns_none(self):
        assert extract_json_object('{"a": 1') is None
        assert extract_json_object("no json here") is None


class TestParseJudgment:
    def test_valid_response_in_fences_with_prose(self):
        raw = "Sure!\n```json\n" + judgment_json(prediction="fake", confidence=88.6, credibility=15) + "\n```"
        judgment = parse_judgment_response(raw)
        assert judgment.prediction == "FAKE"
        assert judgment.confidence == 89
        assert judgment.credibility_score == 15
        assert judgment.flags == ("Unsourced claims",)
        assert judgment.factual_concerns == ("No named sources",)

    def test_scores_are_clamped(self):
        judgment = parse_judgment_response(judgment_json(confidence=140, credibility=-5))
        assert judgment.confidence == 100
        assert judgment.credibility_score == 0

    def test_missing_optional_fields(self):
        judgment = parse_judgment_response('{"prediction": "REAL", "confidence": 70}')
        assert judgment.credibility_score == 50
        assert judgment.flags == ()
        assert judgment.reasoning == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "I cannot help with that.",
            '{"prediction": "FAKE", "confidence": 80,}',
            '{"prediction": "MAYBE", "confidence": 80}',
            '{"confidence": 80}',
            '{"prediction": "FAKE", "confidence": "high"}',
            '{"prediction": "FAKE", "confidence": true}',
            '{"prediction": "FAKE"}',
            '{"prediction": "FAKE", "confidence": NaN}',
            '{"prediction": "FAKE", "confidence": Infinity}',
            '{"prediction": "FAKE", "confidence": -Infinity}',
            '{"prediction": "FAKE", "confidence": 1e400}',
        ],
    )
    def test_invalid_responses_raise(self, raw):
        with pytest.raises(AIResponseError):
            parse_judgment_response(raw)

    def test_non_string_flags_are_coerced(self):
        raw = '{"prediction": "UNCERTAIN", "confidence": 40, "flags": ["a", 3, null, " "], "credibilityScore": "x"}'
        judgment = parse_judgment_response(raw)
        assert judgment.flags == ("a", "3")
        assert judgment.credibility_score == 50

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "1e400"])
    def test_non_finite_credibility_is_neutral(self, literal):
        raw = '{"prediction": "REAL", "confidence": 70, "credibilityScore": %s}' % literal
        assert parse_judgment_response(raw).credibility_score == 50

    def test_huge_integer_confidence_is_clamped(self):
        raw = '{"prediction": "REAL", "confidence": 1%s}' % ("0" * 400)
        assert parse_judgment_response(raw).confidence == 100
