"""
Affirmation generation for journal entries.

The provider runs an ordered chain of strategies (remote Hugging Face model,
keyword heuristic, generic random pick) and returns the first usable
affirmation. Journal submission must never be blocked by the remote model, so
``AffirmationProvider.generate`` always returns a non-empty string.
"""
import logging
import random
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import requests

from .errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "google/gemma-2-2b-it"
DEFAULT_INFERENCE_ENDPOINT = "https://router.huggingface.co/models/"
DEFAULT_MAX_NEW_TOKENS = 120
DEFAULT_TEMPERATURE = 0.8
DEFAULT_TIMEOUT = 10

GENERIC_AFFIRMATIONS = [
    "Gentle reminder: breathe. You are enough in this moment.",
    "You are allowed to rest and still be proud of the progress you've made.",
    "One small step counts; you are moving forward.",
    "Peace comes from within. Do not seek it without.",
    "This moment is all there is.",
    "You are the sky. Everything else is just the weather.",
    "Inhale the future, exhale the past.",
]

# Keywords match whole words, optionally followed by one of these endings
KEYWORD_SUFFIXES = ("s", "es", "d", "ed", "ing", "ly", "ness", "ship")

# First matching category wins, so the order here is the priority order.
KEYWORD_CATEGORIES: List[Tuple[str, Tuple[str, ...], Tuple[str, ...]]] = [
    ("stress",
     ("stress", "anxious", "anxiety", "overwhelm", "worried", "worry", "panic", "panicked", "panicking",
      "nervous", "pressure", "scared", "afraid", "fear"),
     ("You have handled hard days before, and you will handle this one too.",
      "Breathe slowly. You only need to take the next small step.",
      "It is okay to pause. Calm is something you can return to.")),
    ("sadness",
     ("sad", "hurt", "pain", "painful", "lonely", "loneliness", "cry", "cried", "grief", "loss",
      "depressed", "depression", "down"),
     ("Your feelings are valid, and this heaviness will not last forever.",
      "Be as gentle with yourself as you would be with a friend.",
      "Even on the hardest days, you are worthy of care.")),
    ("gratitude",
     ("grateful", "gratitude", "thankful", "thank", "appreciate", "blessed"),
     ("Gratitude grows wherever you place your attention.",
      "Noticing the good is a strength you are building every day.")),
    ("joy",
     ("happy", "happier", "happiness", "joy", "joyful", "excited", "exciting", "great", "wonderful",
      "fun", "laugh", "smile"),
     ("Let yourself fully enjoy this moment; you deserve it.",
      "Your joy is a light worth sharing.")),
    ("goals",
     ("goal", "plan", "planned", "planning", "progress", "achieve", "work", "study", "studied",
      "project", "finish"),
     ("Every step forward counts, no matter how small.",
      "You are building something meaningful, one day at a time.")),
    ("love",
     ("love", "friend", "family", "partner", "together", "care", "kind"),
     ("The love you give and receive makes your world brighter.",
      "You are surrounded by connection, and you are part of it.")),
]


class AffirmationStrategy:
    """One link in the provider chain.

    ``generate`` returns an affirmation or None when it has nothing usable.
    """

    name = "strategy"

    def generate(self, text: str, mood_label: Optional[str] = None,
                 mood_value: Optional[int] = None) -> Optional[str]:
        raise NotImplementedError


class HuggingFaceStrategy(AffirmationStrategy):
    """Ask a Hugging Face hosted model for a one-sentence affirmation."""

    name = "huggingface"

    def __init__(self, api_key: Optional[str],
                 model_name: str = DEFAULT_MODEL_NAME,
                 endpoint: str = DEFAULT_INFERENCE_ENDPOINT,
                 timeout: float = DEFAULT_TIMEOUT,
                 max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS,
                 temperature: float = DEFAULT_TEMPERATURE,
                 session: Optional[requests.Session] = None):
        """Initialize the strategy.

        Args:
            api_key: Hugging Face API token. Without it the strategy is skipped.
            model_name: Hosted model to call.
            endpoint: Inference endpoint prefix; the model name is appended.
            timeout: Request timeout in seconds.
            max_new_tokens: Max tokens for the response.
            temperature: Sampling temperature.
            session: Optional requests session (tests mount adapters on it).
        """
        self.api_key = api_key
        self.model_name = model_name
        self.api_url = f"{endpoint}{model_name}"
        self.timeout = timeout
        self.max_new_tokens = max_new_tokens
        self.temperature = temperature
        self.session = session or requests.Session()

        logger.info(f"Affirmation model: {self.model_name} (API key present: {bool(api_key)})")

    def get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    @staticmethod
    def build_prompt(text: str, mood_label: Optional[str], mood_value: Optional[int]) -> str:
        label = mood_label or "Unknown"
        value = "?" if mood_value is None else mood_value
        return (f'You are gentle. User mood: {label} ({value}/100). Entry: "{text}". '
                "Produce one short affirmation, one sentence, no quotes.")

    def _call_api(self, prompt: str) -> Any:
        """POST the prompt and return the decoded JSON body.

        Raises:
            ProviderError: on transport errors, timeouts, non-2xx statuses
                or a body that is not JSON.
        """
        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": self.max_new_tokens,
                "temperature": self.temperature,
                "return_full_text": False
            }
        }
        try:
            response = self.session.post(
                self.api_url,
                headers=self.get_headers(),
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise ProviderError("Request to Hugging Face API timed out.") from e
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Failed to communicate with Hugging Face API: {e}") from e

        logger.debug(f"Hugging Face HTTP status: {response.status_code}")
        if not response.ok:
            raise ProviderError(f"Hugging Face API returned status {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError("Hugging Face API returned a body that is not JSON") from e

    @staticmethod
    def extract_generated_text(result: Any) -> str:
        """Pull ``generated_text`` out of the list or dict response shapes."""
        if isinstance(result, list) and result:
            result = result[0]
        if isinstance(result, dict) and isinstance(result.get("generated_text"), str):
            return result["generated_text"]
        return ""

    @staticmethod
    def clean_response(response: str) -> str:
        """Strip role prefixes, wrapping quotes and extra whitespace."""
        if not response:
            return ""

        response = response.strip()
        for prefix in ("Affirmation:", "Assistant:", "AI:"):
            if response.lower().startswith(prefix.lower()):
                response = response[len(prefix):].strip()

        if len(response) >= 2 and response[0] == response[-1] and response[0] in "\"'":
            response = response[1:-1]

        return ' '.join(response.split())

    def generate(self, text, mood_label=None, mood_value=None):
        if not self.api_key:
            logger.debug("HUGGINGFACE_API_KEY not set, skipping remote affirmation")
            return None

        try:
            result = self._call_api(self.build_prompt(text, mood_label, mood_value))
        except ProviderError as e:
            logger.warning(f"Remote affirmation unavailable: {e.message}")
            return None

        affirmation = self.clean_response(self.extract_generated_text(result))
        if not affirmation:
            logger.warning(f"Unexpected Hugging Face response format: {str(result)[:200]}")
            return None
        return affirmation


def keyword_pattern(keywords: Iterable[str]) -> "re.Pattern":
    """Word-boundary regex for a keyword list: "worried" and "stressed" match,
    "scared" (care) and "homework" (work) do not."""
    alternatives = "|".join(re.escape(k.lower()) for k in sorted(keywords, key=len, reverse=True))
    if not alternatives:
        return re.compile(r"(?!)")
    suffixes = "|".join(KEYWORD_SUFFIXES)
    return re.compile(rf"\b(?:{alternatives})(?:{suffixes})?\b")


class KeywordStrategy(AffirmationStrategy):
    """Pick an affirmation from the first keyword category found in the text."""

    name = "keyword"

    def __init__(self, categories: Sequence[Tuple[str, Iterable[str], Sequence[str]]] = KEYWORD_CATEGORIES,
                 rng: Optional[random.Random] = None):
        self.categories = [(name, keyword_pattern(keywords), tuple(choices))
                           for name, keywords, choices in categories]
        self.rng = rng or random.Random()

    def match_category(self, text: str) -> Optional[str]:
        lowered = (text or "").lower()
        for name, pattern, _ in self.categories:
            if pattern.search(lowered):
                return name
        return None

    def generate(self, text, mood_label=None, mood_value=None):
        category = self.match_category(text)
        if category is None:
            return None
        choices = next(choices for name, _, choices in self.categories if name == category)
        if not choices:
            return None
        logger.debug(f"Keyword category matched: {category}")
        return self.rng.choice(choices)


class RandomStrategy(AffirmationStrategy):
    """Uniform pick from the generic affirmations."""

    name = "random"

    def __init__(self, affirmations: Sequence[str] = tuple(GENERIC_AFFIRMATIONS),
                 rng: Optional[random.Random] = None):
        self.affirmations = list(affirmations)
        self.rng = rng or random.Random()

    def generate(self, text, mood_label=None, mood_value=None):
        if not self.affirmations:
            return None
        return self.rng.choice(self.affirmations)


class AffirmationProvider:
    """Run strategies in order and return the first non-empty affirmation."""

    def __init__(self, strategies: Sequence[AffirmationStrategy]):
        self.strategies = list(strategies)

    @classmethod
    def local(cls, rng: Optional[random.Random] = None) -> "AffirmationProvider":
        """Provider without the remote step (keyword heuristic, then random)."""
        return cls([KeywordStrategy(rng=rng), RandomStrategy(rng=rng)])

    @classmethod
    def from_config(cls, config: Mapping[str, Any],
                    session: Optional[requests.Session] = None) -> "AffirmationProvider":
        """Build the full chain from Flask-style configuration."""
        remote = HuggingFaceStrategy(
            api_key=config.get("HUGGINGFACE_API_KEY"),
            model_name=config.get("GENERATION_MODEL_NAME") or DEFAULT_MODEL_NAME,
            endpoint=config.get("HF_INFERENCE_ENDPOINT") or DEFAULT_INFERENCE_ENDPOINT,
            timeout=config.get("AFFIRMATION_TIMEOUT", DEFAULT_TIMEOUT),
            max_new_tokens=config.get("AFFIRMATION_MAX_NEW_TOKENS", DEFAULT_MAX_NEW_TOKENS),
            temperature=config.get("AFFIRMATION_TEMPERATURE", DEFAULT_TEMPERATURE),
            session=session,
        )
        return cls([remote] + cls.local().strategies)

    def generate(self, text: str, mood_label: Optional[str] = None,
                 mood_value: Optional[int] = None) -> str:
        """Return an affirmation for the entry text. Never raises."""
        for strategy in self.strategies:
            try:
                affirmation = strategy.generate(text, mood_label, mood_value)
            except Exception as e:
                logger.error(f"Affirmation strategy '{strategy.name}' failed: {e}", exc_info=True)
                continue
            if affirmation and affirmation.strip():
                logger.info(f"Affirmation from '{strategy.name}' strategy")
                return affirmation.strip()

        logger.warning("All affirmation strategies came back empty, using default affirmation")
        return GENERIC_AFFIRMATIONS[0]
