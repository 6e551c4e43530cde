"""
Affirmation provider and its strategies.
"""
import random

import pytest
import requests

from moodjournal.utils.affirmation_service import (
    GENERIC_AFFIRMATIONS,
    KEYWORD_CATEGORIES,
    AffirmationProvider,
    AffirmationStrategy,
    HuggingFaceStrategy,
    KeywordStrategy,
    RandomStrategy,
)

from .conftest import StubAdapter

HF_ENDPOINT = "http://hf.test/models/"


def hf_strategy(adapter, api_key="hf_test"):
    session = requests.Session()
    session.mount("http://hf.test", adapter)
    return HuggingFaceStrategy(api_key=api_key, endpoint=HF_ENDPOINT, model_name="demo/model",
                               timeout=1, session=session)


class ExplodingStrategy(AffirmationStrategy):
    name = "exploding"

    def generate(self, text, mood_label=None, mood_value=None):
        raise RuntimeError("boom")


class TestHuggingFaceStrategy:

    def test_returns_cleaned_generated_text(self):
        adapter = StubAdapter(body=[{"generated_text": '  "You are doing   your best."  '}])
        strategy = hf_strategy(adapter)

        assert strategy.generate("Long day", "Uneasy", 30) == "You are doing your best."
        method, url, _ = adapter.calls[0]
        assert method == "POST"
        assert url == "http://hf.test/models/demo/model"

    def test_prompt_carries_mood_context(self):
        prompt = HuggingFaceStrategy.build_prompt("Had a good day", "Content", 75)
        assert "Content (75/100)" in prompt
        assert '"Had a good day"' in prompt

    def test_dict_response_shape(self):
        assert HuggingFaceStrategy.extract_generated_text({"generated_text": "Hi"}) == "Hi"
        assert HuggingFaceStrategy.extract_generated_text({"error": "loading"}) == ""
        assert HuggingFaceStrategy.extract_generated_text([]) == ""

    @pytest.mark.parametrize("adapter", [
        StubAdapter(error=requests.exceptions.ConnectionError("down")),
        StubAdapter(error=requests.exceptions.Timeout("slow")),
        StubAdapter(status_code=503, body={"error": "Model is loading"}),
        StubAdapter(body="<html>not json</html>"),
        StubAdapter(body=[{"generated_text": "   "}]),
    ])
    def test_failures_yield_no_result(self, adapter):
        assert hf_strategy(adapter).generate("text", "Neutral", 50) is None

    def test_skipped_without_api_key(self):
        adapter = StubAdapter(body=[{"generated_text": "unused"}])
        assert hf_strategy(adapter, api_key=None).generate("text") is None
        assert adapter.calls == []


class TestKeywordStrategy:

    def test_priority_order_is_fixed(self):
        names = [name for name, _, _ in KEYWORD_CATEGORIES]
        assert names == ["stress", "sadness", "gratitude", "joy", "goals", "love"]

    def test_first_matching_category_wins(self):
        strategy = KeywordStrategy()
        assert strategy.match_category("I am grateful but so anxious about tomorrow") == "stress"
        assert strategy.match_category("Feeling lonely, though thankful for tea") == "sadness"
        assert strategy.match_category("So thankful and happy") == "gratitude"
        assert strategy.match_category("I LOVE my FAMILY") == "love"

    @pytest.mark.parametrize("text,expected", [
        ("I was scared walking home", "stress"),
        ("I downloaded a new podcast", None),
        ("Did my homework after dinner", None),
        ("Painting all afternoon", None),
        ("Careful with the stairs", None),
    ])
    def test_keywords_match_whole_words(self, text, expected):
        assert KeywordStrategy().match_category(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("So stressed about the exam", "stress"),
        ("Worrying all night", "stress"),
        ("Sadly it rained", "sadness"),
        ("Smiled at a stranger", "joy"),
        ("Reached two goals", "goals"),
        ("Loved the dinner", "love"),
    ])
    def test_inflected_keywords_match(self, text, expected):
        assert KeywordStrategy().match_category(text) == expected

    def test_empty_keyword_list_never_matches(self):
        strategy = KeywordStrategy([("empty", (), ("unused",))])
        assert strategy.match_category("anything at all") is None

    def test_no_match(self):
        strategy = KeywordStrategy()
        assert strategy.match_category("Had a good day") is None
        assert strategy.generate("Had a good day") is None

    def test_returns_affirmation_from_matched_category(self):
        strategy = KeywordStrategy(rng=random.Random(7))
        stress_choices = KEYWORD_CATEGORIES[0][2]
        assert strategy.generate("work pressure is high") in stress_choices


class TestAffirmationProvider:

    def test_failing_remote_still_returns_affirmation(self):
        remote = hf_strategy(StubAdapter(error=requests.exceptions.ConnectionError("down")))
        provider = AffirmationProvider([remote, RandomStrategy(rng=random.Random(1))])

        affirmation = provider.generate("Had a good day", "Content", 75)

        assert affirmation in GENERIC_AFFIRMATIONS

    def test_remote_result_preferred(self):
        remote = hf_strategy(StubAdapter(body=[{"generated_text": "You shine."}]))
        provider = AffirmationProvider([remote] + AffirmationProvider.local().strategies)
        assert provider.generate("I feel anxious") == "You shine."

    def test_keyword_before_random(self):
        provider = AffirmationProvider.local(rng=random.Random(3))
        sadness_choices = KEYWORD_CATEGORIES[1][2]
        assert provider.generate("I miss them and it hurts") in sadness_choices

    def test_raising_strategy_is_skipped(self):
        provider = AffirmationProvider([ExplodingStrategy(), RandomStrategy(["Steady."])])
        assert provider.generate("anything") == "Steady."

    def test_default_when_every_strategy_is_empty(self):
        provider = AffirmationProvider([ExplodingStrategy(), RandomStrategy([])])
        assert provider.generate("anything") == GENERIC_AFFIRMATIONS[0]

    def test_seeded_rng_is_deterministic(self):
        first = AffirmationProvider.local(rng=random.Random(42)).generate("Had a good day")
        second = AffirmationProvider.local(rng=random.Random(42)).generate("Had a good day")
        assert first == second

    def test_from_config_without_key_never_calls_remote(self):
        adapter = StubAdapter(body=[{"generated_text": "unused"}])
        session = requests.Session()
        session.mount("http://hf.test", adapter)
        provider = AffirmationProvider.from_config(
            {"HUGGINGFACE_API_KEY": None, "HF_INFERENCE_ENDPOINT": HF_ENDPOINT}, session=session)

        assert provider.generate("Had a good day").strip()
        assert adapter.calls == []
