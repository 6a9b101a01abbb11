"""Orchestration layer wiring storage, generation, lifecycle and the wizard."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Callable, List, Optional

from . import flow
from .config import AppConfig
from .encouragement import EncouragementGenerator, Notifier, RandomSource
from .entries import EntryManager
from .errors import StorageWriteFailure, ValidationError
from .schemas import Entry, Mood
from .storage import EntryStorage, SQLiteKeyValueStore


logger = logging.getLogger(__name__)


def _log_notice(message: str) -> None:
    logger.info("notice: %s", message)


class DiaryPipeline:
    """High-level diary composed of small local-first modules."""

    def __init__(
        self,
        config: AppConfig,
        notify: Optional[Notifier] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.notify = notify or _log_notice

        self.store = SQLiteKeyValueStore(config.storage.path)
        self.storage = EntryStorage(self.store, config.storage.storage_key)
        self.generator = EncouragementGenerator.from_config(
            config,
            rng=rng or random.Random(),
            notify=self.notify,
        )
        self.entries = EntryManager(self.storage, self.generator, clock=clock)

    def create_entry(self, mood: Mood, reflection: str) -> Entry:
        return self.entries.create_entry(mood, reflection)

    def delete_entry(self, entry_id: str) -> bool:
        return self.entries.delete_entry(entry_id)

    def list_entries(self) -> List[Entry]:
        return self.entries.list_entries()

    def get_entry(self, entry_id: str) -> Optional[Entry]:
        return self.entries.get_entry(entry_id)

    def entry_views(self, state: flow.ViewState) -> List[flow.EntryView]:
        return flow.build_entry_views(
            self.list_entries(),
            state,
            excerpt_length=self.config.ui.excerpt_length,
        )

    def submit(self, state: flow.ViewState) -> flow.ViewState:
        """Run the save step of the wizard and return the next view state.

        A state that cannot save (nothing typed, or a save already in flight)
        comes back unchanged.
        """
        if not flow.can_save(state):
            return state
        state = flow.begin_save(state)
        try:
            entry = self.create_entry(state.selected_mood, state.reflection_text)
        except ValidationError:
            return flow.fail_save(state)
        except StorageWriteFailure as exc:
            self.notify(str(exc))
            return flow.fail_save(state)
        return flow.complete_save(state, entry)

    def close(self) -> None:
        self.store.close()
