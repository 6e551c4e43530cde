"""
Mood classification and the mood color gradient.
"""
from typing import Any, Tuple

from .errors import ValidationError

MOOD_MIN = 0
MOOD_MAX = 100
DEFAULT_MOOD_VALUE = 50

# (inclusive upper bound, label), ascending
MOOD_BANDS = (
    (20, "Burdened"),
    (40, "Uneasy"),
    (60, "Neutral"),
    (80, "Content"),
    (MOOD_MAX, "Radiant"),
)

MOOD_LABELS = tuple(label for _, label in MOOD_BANDS)


def validate_mood_value(value: Any) -> int:
    """Return ``value`` as an int in [0, 100] or raise ValidationError.

    Booleans and non-integral floats are rejected.
    """
    if isinstance(value, bool):
        raise ValidationError("Mood value must be a number between 0 and 100.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("Mood value must be a whole number.")
        value = int(value)
    if not isinstance(value, int):
        raise ValidationError("Mood value must be a number between 0 and 100.")
    if value < MOOD_MIN or value > MOOD_MAX:
        raise ValidationError(f"Mood value {value} is outside 0-100.")
    return value


def classify_mood(value: Any) -> str:
    """Map a mood value to its label.

    Each band includes its upper bound: 20 is "Burdened", 21 is "Uneasy",
    80 is "Content", 81 is "Radiant".
    """
    value = validate_mood_value(value)
    for upper, label in MOOD_BANDS:
        if value <= upper:
            return label
    return MOOD_BANDS[-1][1]


def _hsl(h: float, s: float, l: float) -> str:
    return f"hsl({round(h, 2):g}, {round(s, 2):g}%, {round(l, 2):g}%)"


def interpolate_color(value: Any) -> Tuple[str, str]:
    """Return the two gradient colors (orb 1, orb 2) for a mood value.

    The gradient is split at 50: below it only the hues move, from 50 up
    hue, saturation and lightness all move linearly.
    """
    value = validate_mood_value(value)
    if value < 50:
        p = value / 50
        h1, s1, l1 = 230 + (170 - 230) * p, 60, 40
        h2, s2, l2 = 260 + (200 - 260) * p, 70, 45
    else:
        p = (value - 50) / 50
        h1, s1, l1 = 170 + (340 - 170) * p, 60 + 20 * p, 40 + 10 * p
        h2, s2, l2 = 200 + (40 - 200) * p, 70 + 20 * p, 45 + 10 * p
    return _hsl(h1, s1, l1), _hsl(h2, s2, l2)
