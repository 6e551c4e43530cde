"""
View rendering.

Pure functions from ``ClientViewState`` to view models and HTML. Nothing here
talks to the server or changes the state.
"""
import calendar
import os
import re
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .records import EntryRecord
from ..utils.mood import interpolate_color

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')

ENTRY_PREVIEW_LENGTH = 120
HISTORY_PREVIEW_LENGTH = 80

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(['html']),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class CalendarDay:
    day: int
    date_key: str
    has_entries: bool
    is_today: bool
    is_selected: bool


@dataclass(frozen=True)
class CalendarMonth:
    label: str
    leading_blanks: int  # empty cells before day 1, weeks start on Sunday
    days: Tuple[CalendarDay, ...]


@dataclass(frozen=True)
class EntryPreview:
    id: str
    mood_label: str
    time: str
    text: str
    is_active: bool = False


@dataclass(frozen=True)
class EntryDetail:
    date_label: str
    mood_line: str
    affirmation: str
    text: str


@dataclass(frozen=True)
class MoodPanel:
    value: int
    label: str
    color_1: str
    color_2: str


def preview_text(text: str, limit: int) -> str:
    """Collapse whitespace and cut to ``limit`` characters with an ellipsis."""
    collapsed = re.sub(r"\s+", " ", text or "").strip()
    if len(collapsed) > limit:
        return collapsed[:limit] + "…"
    return collapsed


def format_date_nice(date_key: str) -> str:
    """'2024-01-15' -> 'Mon, Jan 15, 2024'."""
    day = datetime.strptime(date_key, "%Y-%m-%d").date()
    return f"{day.strftime('%a, %b')} {day.day}, {day.year}"


def format_time(created_at: Optional[datetime], tz: Optional[tzinfo] = None) -> str:
    """Hour and minute of ``created_at`` in ``tz`` (local time by default)."""
    if created_at is None:
        return ""
    return created_at.astimezone(tz).strftime("%H:%M")


def build_calendar(month: date, entries: List[EntryRecord], selected_date: Optional[str],
                   today: date) -> CalendarMonth:
    """Grid model for one month with entry markers."""
    first_weekday, days_in_month = calendar.monthrange(month.year, month.month)
    marked = {entry.date for entry in entries}
    today_key = today.isoformat()

    days = []
    for day in range(1, days_in_month + 1):
        date_key = date(month.year, month.month, day).isoformat()
        days.append(CalendarDay(
            day=day,
            date_key=date_key,
            has_entries=date_key in marked,
            is_today=date_key == today_key,
            is_selected=date_key == selected_date,
        ))

    return CalendarMonth(
        label=f"{calendar.month_name[month.month]} {month.year}",
        # monthrange counts Monday as 0; the grid starts on Sunday
        leading_blanks=(first_weekday + 1) % 7,
        days=tuple(days),
    )


def build_entry_previews(entries: List[EntryRecord], limit: int, selected_id: Optional[str] = None,
                         tz: Optional[tzinfo] = None) -> List[EntryPreview]:
    return [
        EntryPreview(
            id=entry.id,
            mood_label=entry.mood_label,
            time=format_time(entry.created_at, tz),
            text=preview_text(entry.text, limit),
            is_active=entry.id == selected_id,
        )
        for entry in entries
    ]


def build_entry_detail(entry: Optional[EntryRecord]) -> Optional[EntryDetail]:
    """Detail pane model; None means the explicit empty state."""
    if entry is None:
        return None
    return EntryDetail(
        date_label=format_date_nice(entry.date),
        mood_line=f"Mood: {entry.mood_label} ({entry.mood_value}/100)",
        affirmation=f"“{entry.affirmation}”" if entry.affirmation else "",
        text=entry.text,
    )


def build_mood_panel(value: int, label: str) -> MoodPanel:
    color_1, color_2 = interpolate_color(value)
    return MoodPanel(value=value, label=label, color_1=color_1, color_2=color_2)


# --- HTML ---

def render_mood_panel(state) -> str:
    panel = build_mood_panel(state.current_mood_value, state.mood_label)
    return _env.get_template('mood.html').render(panel=panel, locked=not state.is_mood_logged)


def render_calendar(state) -> str:
    month = build_calendar(state.calendar_month, list(state.cached_entries),
                           state.selected_date, state.today)
    return _env.get_template('calendar.html').render(month=month)


def render_entries_for_date(state, tz: Optional[tzinfo] = None) -> str:
    entries = state.entries_for_date(state.selected_date)
    return _env.get_template('entries.html').render(
        title=f"Entries for {format_date_nice(state.selected_date)}",
        previews=build_entry_previews(entries, ENTRY_PREVIEW_LENGTH, tz=tz),
    )


def render_history(state, tz: Optional[tzinfo] = None) -> str:
    previews = build_entry_previews(list(state.cached_entries), HISTORY_PREVIEW_LENGTH,
                                    selected_id=state.selected_entry_id, tz=tz)
    return _env.get_template('history.html').render(
        previews=previews,
        detail=build_entry_detail(state.selected_entry),
        delete_pending=state.delete_pending,
    )


def render_page(state, tz: Optional[tzinfo] = None) -> str:
    """Full page for the active view."""
    return _env.get_template('page.html').render(
        view=state.active_view.value,
        mood_html=render_mood_panel(state),
        calendar_html=render_calendar(state),
        entries_html=render_entries_for_date(state, tz),
        history_html=render_history(state, tz),
        affirmation=state.pending_affirmation,
    )
