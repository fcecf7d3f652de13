"""
Tests for recognize_choices and its ordinal/number fallback.

The number models are replaced with stubs so these tests do not depend on
the Recognizers Text models.
"""

import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from choices.recognizer.core import FindChoicesOptions, FoundChoice
from choices.recognizer.number_recognizer import (
    RecognizersTextProvider,
    recognize_choices,
    recognize_choices_from_strings,
)

FRUIT = ["apple", "banana", "cherry"]


class StubModel:
    def __init__(self, hits):
        self.hits = list(hits)
        self.queries = []

    def parse(self, query):
        self.queries.append(query)
        return list(self.hits)


class StubProvider:
    def __init__(self, ordinals=(), numbers=()):
        self.ordinal_model = StubModel(ordinals)
        self.number_model = StubModel(numbers)
        self.locales = []

    def get_ordinal_model(self, locale):
        self.locales.append(locale)
        return self.ordinal_model

    def get_number_model(self, locale):
        self.locales.append(locale)
        return self.number_model


def hit(start, text, value):
    return {
        "start": start,
        "end": start + len(text) - 1,
        "text": text,
        "resolution": {"value": value},
    }


ORDINALS = FindChoicesOptions(recognize_ordinals=True)


def test_ordinal_fallback():
    utterance = "the second one"
    models = StubProvider(ordinals=[hit(4, "second", "2")])
    results = recognize_choices_from_strings(utterance, FRUIT, ORDINALS, models)
    assert len(results) == 1
    r = results[0]
    assert r.type_name == "choice"
    assert r.text == "second"
    assert utterance[r.start : r.end + 1] == "second"
    assert r.resolution == FoundChoice(value="banana", index=1, score=1.0)
    assert models.number_model.queries == []


def test_text_match_wins():
    models = StubProvider(ordinals=[hit(14, "second", "2")], numbers=[hit(0, "1", "1")])
    results = recognize_choices_from_strings("banana is the second", FRUIT, ORDINALS, models)
    assert [r.resolution.value for r in results] == ["banana"]
    assert results[0].resolution.synonym == "banana"
    assert models.ordinal_model.queries == []
    assert models.number_model.queries == []


def test_last_resolves_to_final_choice():
    models = StubProvider(ordinals=[hit(4, "last", "end")])
    results = recognize_choices_from_strings("the last one", FRUIT, ORDINALS, models)
    assert results[0].resolution.index == 2
    assert results[0].resolution.value == "cherry"


def test_ordinals_off_by_default():
    models = StubProvider(ordinals=[hit(4, "second", "2")], numbers=[hit(7, "2", "2")])
    results = recognize_choices_from_strings("I want 2", FRUIT, models=models)
    assert models.ordinal_model.queries == []
    assert models.number_model.queries == ["I want 2"]
    assert results[0].resolution == FoundChoice(value="banana", index=1, score=1.0)
    assert results[0].text == "2"


def test_numbers_skipped_when_ordinal_model_found_something():
    models = StubProvider(ordinals=[hit(4, "seventh", "7")], numbers=[hit(0, "1", "1")])
    results = recognize_choices_from_strings("the seventh", FRUIT, ORDINALS, models)
    assert results == []
    assert models.number_model.queries == []


def test_numbers_used_when_ordinal_model_found_nothing():
    models = StubProvider(numbers=[hit(7, "3", "3")])
    results = recognize_choices_from_strings("number 3", FRUIT, ORDINALS, models)
    assert results[0].resolution.index == 2


def test_out_of_range_numbers_skipped():
    models = StubProvider(numbers=[hit(0, "0", "0"), hit(2, "4", "4"), hit(4, "1", "1")])
    results = recognize_choices_from_strings("0 4 1", FRUIT, models=models)
    assert [r.resolution.index for r in results] == [0]


def test_malformed_hits_skipped():
    bad = [
        hit(0, "two", "two"),
        {"start": 4, "end": 4, "text": "x"},
        hit(6, "1.5", "1.5"),
        hit(10, "3", "3"),
    ]
    models = StubProvider(numbers=bad)
    results = recognize_choices_from_strings("two x 1.5 3", FRUIT, models=models)
    assert len(results) == 1
    assert results[0].resolution.value == "cherry"


def test_results_sorted_by_start():
    models = StubProvider(numbers=[hit(6, "3", "3"), hit(0, "1", "1")])
    results = recognize_choices_from_strings("1 and 3", FRUIT, models=models)
    assert [r.start for r in results] == [0, 6]


def test_attribute_style_hits():
    result = SimpleNamespace(start=0, end=0, text="2", resolution={"value": "2"})
    models = StubProvider(numbers=[result])
    results = recognize_choices_from_strings("2", FRUIT, models=models)
    assert results[0].resolution.index == 1


def test_all_fallbacks_disabled():
    models = StubProvider(numbers=[hit(0, "1", "1")])
    opts = FindChoicesOptions(recognize_numbers=False)
    assert recognize_choices_from_strings("1", FRUIT, opts, models) == []
    assert models.locales == []


def test_locale_passed_to_models():
    models = StubProvider()
    opts = FindChoicesOptions(locale="fr-fr", recognize_ordinals=True)
    recognize_choices_from_strings("rien", FRUIT, opts, models)
    assert models.locales == ["fr-fr", "fr-fr"]


def test_none_utterance_parsed_as_empty():
    models = StubProvider()
    assert recognize_choices(None, FRUIT, models=models) == []
    assert models.number_model.queries == [""]


def test_none_choices_rejected():
    with pytest.raises(ValueError):
        recognize_choices("1", None, models=StubProvider())
    with pytest.raises(ValueError):
        recognize_choices_from_strings("1", None, models=StubProvider())


def test_never_mixes_strategies():
    models = StubProvider(numbers=[hit(0, "3", "3")])
    results = recognize_choices_from_strings("3 apple", FRUIT, models=models)
    assert [r.resolution.index for r in results] == [0]
    assert models.number_model.queries == []


class FakeNumberRecognizer:
    """Stands in for recognizers_number.NumberRecognizer and records calls."""

    created = []
    calls = []
    ordinal_hits = []
    number_hits = []

    def __init__(self, culture):
        FakeNumberRecognizer.created.append(culture)

    def get_ordinal_model(self, culture, fallback_to_default_culture):
        FakeNumberRecognizer.calls.append(("ordinal", culture, fallback_to_default_culture))
        return StubModel(FakeNumberRecognizer.ordinal_hits)

    def get_number_model(self, culture, fallback_to_default_culture):
        FakeNumberRecognizer.calls.append(("number", culture, fallback_to_default_culture))
        return StubModel(FakeNumberRecognizer.number_hits)


@pytest.fixture
def fake_recognizers(monkeypatch):
    monkeypatch.setattr(FakeNumberRecognizer, "created", [])
    monkeypatch.setattr(FakeNumberRecognizer, "calls", [])
    monkeypatch.setattr(FakeNumberRecognizer, "ordinal_hits", [])
    monkeypatch.setattr(FakeNumberRecognizer, "number_hits", [])
    module = SimpleNamespace(NumberRecognizer=FakeNumberRecognizer)
    monkeypatch.setitem(sys.modules, "recognizers_number", module)
    return FakeNumberRecognizer


class TestRecognizersTextProvider:
    """Test the default number model provider."""

    def test_ordinal_model_used_by_default_provider(self, fake_recognizers):
        """Test ordinals go through NumberRecognizer(locale).get_ordinal_model."""
        fake_recognizers.ordinal_hits = [hit(4, "second", "2")]
        opts = FindChoicesOptions(locale="en-us", recognize_ordinals=True)
        results = recognize_choices("the second one", FRUIT, opts, models=None)
        assert fake_recognizers.created == ["en-us"]
        assert fake_recognizers.calls == [("ordinal", "en-us", True)]
        assert results[0].resolution.value == "banana"
        assert (results[0].start, results[0].end) == (4, 9)

    def test_number_model_used_by_default_provider(self, fake_recognizers):
        """Test cardinals go through NumberRecognizer(locale).get_number_model."""
        fake_recognizers.number_hits = [hit(7, "2", "2")]
        results = recognize_choices("I want 2", FRUIT, models=None)
        assert fake_recognizers.created == ["en"]
        assert fake_recognizers.calls == [("number", "en", True)]
        assert results[0].resolution.value == "banana"
        assert (results[0].start, results[0].end) == (7, 7)

    def test_ordinals_then_numbers(self, fake_recognizers):
        """Test both models are asked for when the ordinal model finds nothing."""
        fake_recognizers.number_hits = [hit(0, "3", "3")]
        opts = FindChoicesOptions(recognize_ordinals=True)
        results = recognize_choices("3", FRUIT, opts)
        assert [c[0] for c in fake_recognizers.calls] == ["ordinal", "number"]
        assert results[0].resolution.index == 2

    def test_fallback_flag_passed_through(self, fake_recognizers):
        """Test the fallback_to_default_culture setting reaches the recognizer."""
        provider = RecognizersTextProvider(fallback_to_default_culture=False)
        provider.get_number_model("fr-fr")
        assert fake_recognizers.calls == [("number", "fr-fr", False)]
