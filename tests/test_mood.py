"""
Mood classification and color gradient.
"""
import pytest

from moodjournal.utils.errors import ValidationError
from moodjournal.utils.mood import MOOD_LABELS, classify_mood, interpolate_color, validate_mood_value


class TestClassifyMood:

    @pytest.mark.parametrize("value,label", [
        (0, "Burdened"), (20, "Burdened"),
        (21, "Uneasy"), (40, "Uneasy"),
        (41, "Neutral"), (60, "Neutral"),
        (61, "Content"), (80, "Content"),
        (81, "Radiant"), (100, "Radiant"),
    ])
    def test_band_boundaries(self, value, label):
        assert classify_mood(value) == label

    def test_total_and_monotonic(self):
        ranks = [MOOD_LABELS.index(classify_mood(v)) for v in range(0, 101)]
        assert ranks == sorted(ranks)
        assert set(ranks) == set(range(len(MOOD_LABELS)))

    @pytest.mark.parametrize("value", [-1, 101, "50", None, True, 50.5])
    def test_rejects_out_of_range_or_non_integers(self, value):
        with pytest.raises(ValidationError):
            classify_mood(value)

    def test_whole_floats_are_accepted(self):
        assert validate_mood_value(75.0) == 75
        assert classify_mood(75.0) == "Content"


class TestInterpolateColor:

    def test_endpoints(self):
        assert interpolate_color(0) == ("hsl(230, 60%, 40%)", "hsl(260, 70%, 45%)")
        assert interpolate_color(50) == ("hsl(170, 60%, 40%)", "hsl(200, 70%, 45%)")
        assert interpolate_color(100) == ("hsl(340, 80%, 50%)", "hsl(40, 90%, 55%)")

    def test_lower_half_moves_hue_only(self):
        c1, c2 = interpolate_color(25)
        assert c1 == "hsl(200, 60%, 40%)"
        assert c2 == "hsl(230, 70%, 45%)"

    def test_deterministic(self):
        assert interpolate_color(63) == interpolate_color(63)
