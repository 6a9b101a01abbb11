"""Core data structures shared across modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict

from .errors import StorageReadFailure, ValidationError


ENTRY_FIELDS = ("id", "date", "mood", "reflection", "encouragement")


class Mood(str, Enum):
    """Self-reported emotional state picked in the first wizard step."""

    HAPPY = "happy"
    DOWN = "down"
    ANGRY = "angry"
    NEUTRAL = "neutral"
    OVERWHELMED = "overwhelmed"

    @classmethod
    def parse(cls, value: object) -> "Mood":
        """Return the member for ``value`` or raise ``ValidationError``."""
        if isinstance(value, cls):
            return value
        if value is None:
            raise ValidationError("Please choose a mood.")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown mood: {value!r}") from None


@dataclass
class Entry:
    """One persisted diary record."""

    id: str
    date: str
    mood: Mood
    reflection: str
    encouragement: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "date": self.date,
            "mood": self.mood.value,
            "reflection": self.reflection,
            "encouragement": self.encouragement,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Entry":
        """Validate a decoded JSON object and build an entry from it."""
        if not isinstance(data, dict):
            raise StorageReadFailure(f"Entry must be an object, got {type(data).__name__}")
        for key in ENTRY_FIELDS:
            if not isinstance(data.get(key), str):
                raise StorageReadFailure(f"Entry field {key!r} missing or not a string")
        try:
            mood = Mood.parse(data["mood"])
        except ValidationError as exc:
            raise StorageReadFailure(str(exc)) from exc
        if not data["reflection"].strip():
            raise StorageReadFailure(f"Entry {data['id']!r} has an empty reflection")
        try:
            date.fromisoformat(data["date"])
        except ValueError as exc:
            raise StorageReadFailure(f"Entry {data['id']!r} has a bad date: {data['date']!r}") from exc
        return cls(
            id=data["id"],
            date=data["date"],
            mood=mood,
            reflection=data["reflection"],
            encouragement=data["encouragement"],
        )
