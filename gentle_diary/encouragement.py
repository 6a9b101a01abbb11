"""Encouragement messages with a model-first, rule-based-fallback design."""

from __future__ import annotations

import logging
import os
import random
from typing import Callable, List, Optional, Protocol

from google import genai
from google.genai import types as genai_types

from .config import AppConfig
from .errors import GenerationFailure
from .schemas import Mood


logger = logging.getLogger(__name__)

OFFLINE_NOTICE = "Using offline mode"

MOOD_TEMPLATES = {
    Mood.HAPPY.value: "It's wonderful that you felt a spark of happiness today. Savor it—small moments count.",
    Mood.DOWN.value: "It's okay to feel heavy today. Thank you for noticing and writing it down—you're not alone in this.",
    Mood.ANGRY.value: "Your frustration is valid. Let's channel it gently—one small, doable step can restore a bit of control.",
    Mood.NEUTRAL.value: "A quiet day is still progress. Your steady attention to recovery makes a difference over time.",
    Mood.OVERWHELMED.value: "This is a lot. Try one compassionate pause—slow breath, a sip of water, and ask for a small help.",
}

# Evaluated in order; each group adds at most one sentence.
KEYWORD_ADDITIONS = [
    (("pain", "discomfort", "ache"), "Consider a gentle stretch or rest, and note any patterns."),
    (("support", "family", "friend"), "Leaning on support is strength, not weakness."),
    (("progress", "proud", "better"), "Notice the progress you've already made—it counts."),
    (("fear", "anxiety", "worried", "scared"), "If worries linger, a brief check-in with a professional can help."),
]

SYSTEM_INSTRUCTION = "You are a gentle, supportive companion."


class RandomSource(Protocol):
    def random(self) -> float: ...


Delegate = Callable[[Mood, str], str]
Notifier = Callable[[str], None]


def _mood_key(mood: object) -> str:
    if isinstance(mood, Mood):
        return mood.value
    return str(mood).strip().lower() if mood is not None else ""


def base_template(mood: object) -> str:
    """Template for ``mood``; unknown moods get the neutral one."""
    return MOOD_TEMPLATES.get(_mood_key(mood), MOOD_TEMPLATES[Mood.NEUTRAL.value])


def matching_additions(reflection: str) -> List[str]:
    text = reflection.lower()
    return [
        sentence
        for keywords, sentence in KEYWORD_ADDITIONS
        if any(keyword in text for keyword in keywords)
    ]


def generate_rule_based(mood: object, reflection: str, rng: Optional[RandomSource] = None) -> str:
    """Build a message from the mood template plus keyword-driven additions.

    The first matching addition is always appended. A second one, when
    present, is appended on a fair coin flip drawn from ``rng``.
    """
    rng = rng or random
    message = base_template(mood)
    additions = matching_additions(reflection)
    if additions:
        message += " " + additions[0]
        if len(additions) > 1 and rng.random() < 0.5:
            message += " " + additions[1]
    return message


def build_prompt(mood: Mood, reflection: str) -> str:
    return (
        "You are a gentle companion for post-mastectomy recovery. "
        f"Based on the mood = {_mood_key(mood)} and this reflection: {reflection}, "
        "write a short, kind encouragement (2-4 sentences). "
        "Avoid medical advice; focus on validation, small steps, and self-compassion."
    )


class GeminiEncouragementClient:
    """Delegated generation through the Gemini API."""

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        google_api_key: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: int = 150,
    ):
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.api_key = google_api_key or os.getenv("GEMINI_API_KEY")
        if self.api_key:
            self.client = genai.Client(api_key=self.api_key)
        else:
            self.client = None

    def __call__(self, mood: Mood, reflection: str) -> str:
        if not self.client:
            raise GenerationFailure("API not configured")
        try:
            resp = self.client.models.generate_content(
                model=self.model,
                contents=build_prompt(mood, reflection),
                config=genai_types.GenerateContentConfig(
                    system_instruction=SYSTEM_INSTRUCTION,
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                ),
            )
        except Exception as exc:
            raise GenerationFailure(f"API error: {exc}") from exc

        raw = getattr(resp, "text", None)
        if not isinstance(raw, str) or not raw.strip():
            raise GenerationFailure("API returned no text")
        return raw.strip()


class EncouragementGenerator:
    """Chooses between delegated and rule-based generation."""

    def __init__(
        self,
        use_delegated: bool = False,
        delegate: Optional[Delegate] = None,
        rng: Optional[RandomSource] = None,
        notify: Optional[Notifier] = None,
    ):
        self.use_delegated = use_delegated
        self.delegate = delegate
        self.rng = rng
        self.notify = notify

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        rng: Optional[RandomSource] = None,
        notify: Optional[Notifier] = None,
    ) -> "EncouragementGenerator":
        gen = config.generation
        delegate = None
        if gen.use_delegated:
            if gen.provider != "google":
                raise ValueError(f"Unsupported generation provider: {gen.provider!r}")
            delegate = GeminiEncouragementClient(
                model=gen.model,
                google_api_key=config.google_api_key,
                temperature=gen.temperature,
                max_output_tokens=gen.max_output_tokens,
            )
        return cls(use_delegated=gen.use_delegated, delegate=delegate, rng=rng, notify=notify)

    def generate(self, mood: Mood, reflection: str) -> str:
        if not self.use_delegated:
            return generate_rule_based(mood, reflection, self.rng)

        try:
            if self.delegate is None:
                raise GenerationFailure("API not configured")
            text = self.delegate(mood, reflection)
            if not isinstance(text, str):
                raise GenerationFailure(f"Delegate returned {type(text).__name__}, not text")
            return text
        except Exception as exc:
            logger.warning("Delegated generation failed, falling back to rules: %s", exc)
            if self.notify is not None:
                self.notify(OFFLINE_NOTICE)
            return generate_rule_based(mood, reflection, self.rng)
