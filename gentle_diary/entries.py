"""Entry lifecycle: create, delete and list against the entry storage."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from .encouragement import EncouragementGenerator
from .errors import ValidationError
from .schemas import Entry, Mood
from .storage import EntryStorage


logger = logging.getLogger(__name__)


def _timestamp_id(now: datetime, taken: set) -> str:
    candidate = int(now.timestamp() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class EntryManager:
    """Each operation re-reads the full list, changes it, and writes it back."""

    def __init__(
        self,
        storage: EntryStorage,
        generator: EncouragementGenerator,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.storage = storage
        self.generator = generator
        self.clock = clock or datetime.now

    def create_entry(self, mood: object, reflection_raw: Optional[str]) -> Entry:
        """Validate input, generate an encouragement and prepend the new entry.

        Raises ``ValidationError`` before touching the generator or storage,
        and lets ``StorageWriteFailure`` propagate from the final write.
        """
        parsed_mood = Mood.parse(mood)
        reflection = (reflection_raw or "").strip()
        if not reflection:
            raise ValidationError("Please write a short reflection.")

        now = self.clock()
        encouragement = self.generator.generate(parsed_mood, reflection)

        entries = self.storage.load_all()
        entry = Entry(
            id=_timestamp_id(now, {e.id for e in entries}),
            date=now.date().isoformat(),
            mood=parsed_mood,
            reflection=reflection,
            encouragement=encouragement,
        )
        entries.insert(0, entry)
        self.storage.save_all(entries)
        logger.info("Created entry %s (%s)", entry.id, entry.mood.value)
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        """Remove ``entry_id`` if present. Returns whether anything was removed."""
        entries = self.storage.load_all()
        remaining = [entry for entry in entries if entry.id != entry_id]
        removed = len(remaining) != len(entries)
        if removed:
            self.storage.save_all(remaining)
            logger.info("Deleted entry %s", entry_id)
        return removed

    def list_entries(self) -> List[Entry]:
        return self.storage.load_all()

    def get_entry(self, entry_id: str) -> Optional[Entry]:
        for entry in self.storage.load_all():
            if entry.id == entry_id:
                return entry
        return None
