"""Two-step journaling wizard as pure transitions over an explicit view state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dateutil import parser as dt_parser

from .schemas import Entry, Mood


class Step(str, Enum):
    MOOD_SELECTION = "mood_selection"
    REFLECTING = "reflecting"
    SHOWING_ENCOURAGEMENT = "showing_encouragement"


MOOD_LABELS = {
    Mood.HAPPY.value: ("\U0001F60A", "Happy"),
    Mood.DOWN.value: ("\U0001F61E", "Down"),
    Mood.ANGRY.value: ("\U0001F621", "Angry"),
    Mood.NEUTRAL.value: ("\U0001F610", "Neutral"),
    Mood.OVERWHELMED.value: ("\U0001F623", "Overwhelmed"),
}


@dataclass(frozen=True)
class ViewState:
    """Everything the wizard and diary list need to render."""

    step: Step = Step.MOOD_SELECTION
    selected_mood: Optional[Mood] = None
    reflection_text: str = ""
    saving: bool = False
    encouragement: Optional[str] = None
    expanded: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step.value,
            "selected_mood": self.selected_mood.value if self.selected_mood else None,
            "reflection_text": self.reflection_text,
            "saving": self.saving,
            "encouragement": self.encouragement,
            "expanded": list(self.expanded),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ViewState":
        mood = data.get("selected_mood")
        return cls(
            step=Step(data.get("step", Step.MOOD_SELECTION.value)),
            selected_mood=Mood(mood) if mood else None,
            reflection_text=data.get("reflection_text", ""),
            saving=bool(data.get("saving", False)),
            encouragement=data.get("encouragement"),
            expanded=tuple(data.get("expanded", ())),
        )


# --- transitions -----------------------------------------------------------


def select_mood(state: ViewState, mood: Mood) -> ViewState:
    if state.step is not Step.MOOD_SELECTION:
        return state
    return replace(state, selected_mood=Mood.parse(mood))


def go_to_reflection(state: ViewState) -> ViewState:
    if not can_proceed(state):
        return state
    return replace(state, step=Step.REFLECTING)


def go_back(state: ViewState) -> ViewState:
    return replace(state, step=Step.MOOD_SELECTION, encouragement=None)


def update_reflection(state: ViewState, text: str) -> ViewState:
    return replace(state, reflection_text=text)


def begin_save(state: ViewState) -> ViewState:
    if not can_save(state):
        return state
    return replace(state, saving=True)


def complete_save(state: ViewState, entry: Entry) -> ViewState:
    return replace(
        state,
        step=Step.SHOWING_ENCOURAGEMENT,
        saving=False,
        encouragement=entry.encouragement,
    )


def fail_save(state: ViewState) -> ViewState:
    return replace(state, saving=False)


def reset(state: ViewState) -> ViewState:
    return ViewState(expanded=state.expanded)


def toggle_expanded(state: ViewState, entry_id: str) -> ViewState:
    if entry_id in state.expanded:
        expanded = tuple(i for i in state.expanded if i != entry_id)
    else:
        expanded = state.expanded + (entry_id,)
    return replace(state, expanded=expanded)


# --- derived values --------------------------------------------------------


def can_proceed(state: ViewState) -> bool:
    return state.step is Step.MOOD_SELECTION and state.selected_mood is not None


def can_save(state: ViewState) -> bool:
    return (
        state.step is Step.REFLECTING
        and state.selected_mood is not None
        and bool(state.reflection_text.strip())
        and not state.saving
    )


def step_number(state: ViewState) -> int:
    return 1 if state.step is Step.MOOD_SELECTION else 2


def char_count(state: ViewState) -> int:
    return len(state.reflection_text)


def over_soft_limit(state: ViewState, limit: int = 800) -> bool:
    return char_count(state) > limit


# --- entry list rendering --------------------------------------------------


@dataclass(frozen=True)
class EntryView:
    id: str
    date_label: str
    mood_emoji: str
    mood_label: str
    reflection: str
    expanded: bool
    toggle_label: str
    encouragement: str


def excerpt(text: str, limit: int = 120) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def format_entry_date(value: str) -> str:
    """``2026-10-19`` -> ``October 19, 2026``."""
    parsed = dt_parser.isoparse(value)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def mood_label(mood: object) -> Tuple[str, str]:
    key = mood.value if isinstance(mood, Mood) else str(mood)
    return MOOD_LABELS.get(key, MOOD_LABELS[Mood.NEUTRAL.value])


def build_entry_views(
    entries: Sequence[Entry],
    state: ViewState,
    excerpt_length: int = 120,
) -> List[EntryView]:
    views: List[EntryView] = []
    for entry in entries:
        is_expanded = entry.id in state.expanded
        emoji, label = mood_label(entry.mood)
        views.append(
            EntryView(
                id=entry.id,
                date_label=format_entry_date(entry.date),
                mood_emoji=emoji,
                mood_label=label,
                reflection=entry.reflection if is_expanded else excerpt(entry.reflection, excerpt_length),
                expanded=is_expanded,
                toggle_label="Collapse" if is_expanded else "Expand",
                encouragement=entry.encouragement,
            )
        )
    return views
