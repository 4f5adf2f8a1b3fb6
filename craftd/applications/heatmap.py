# craftd/applications/heatmap.py
"""
Application-activity heatmap.

Buckets job applications into days over a trailing window, pads the window
so columns start on Sunday, splits it into weeks and keeps the most recent
weeks that fit the display.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from craftd.career.models import Serializable
from craftd.schema.models import JobApplication
from craftd.utils.columns import COUNT, DAY, HEATMAP_DAY_COLS, INTENSITY, WEEKDAY
from craftd.utils.date_utils import today

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 365
MAX_WEEKS = 52
DAYS_PER_WEEK = 7
MAX_INTENSITY = 4

# Responsive layout, in pixels
CONTAINER_PADDING = 48
WEEKDAY_LABELS_WIDTH = 40
GRID_GAP = 8
WEEK_COLUMN_WIDTH = 16
FALLBACK_CONTAINER_WIDTH = 320


@dataclass(frozen=True)
class HeatmapDay(Serializable):
    date: dt.date
    count: int = 0
    intensity: int = 0
    application_ids: List[str] = field(default_factory=list)
    is_empty: bool = False


@dataclass(frozen=True)
class ApplicationHeatmap(Serializable):
    weeks: List[List[HeatmapDay]] = field(default_factory=list)
    total_applications: int = 0
    active_days: int = 0
    max_in_one_day: int = 0


def intensity_level(count: int) -> int:
    """Colour bucket for a day: 0 for none, then 1-3, and 4 for four or more."""
    if count <= 0:
        return 0
    return min(count, MAX_INTENSITY)


def sunday_index(day: dt.date) -> int:
    """Weekday with Sunday as 0, matching the grid's first row."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def weeks_for_width(container_width: Optional[int]) -> int:
    """How many week columns fit a container of the given width (1 to 52)."""
    width = container_width or FALLBACK_CONTAINER_WIDTH
    available = max(0, width - CONTAINER_PADDING - WEEKDAY_LABELS_WIDTH - GRID_GAP)
    max_weeks = available // WEEK_COLUMN_WIDTH
    return max(1, min(MAX_WEEKS, max_weeks))


def build_day_frame(
    applications: Iterable[JobApplication], as_of: dt.date, days: int = DEFAULT_DAYS
) -> Tuple[pd.DataFrame, dict]:
    """
    Daily application counts for the ``days`` days ending on ``as_of``.

    Returns the frame (one row per day, oldest first) and a mapping of day to
    application ids for drill-down.
    """
    window = pd.date_range(end=pd.Timestamp(as_of), periods=days, freq="D")

    ids_by_day: dict = {}
    dated = []
    for idx, app in enumerate(applications):
        applied_on = app.activity_date
        if applied_on is None:
            continue
        dated.append(applied_on)
        ids_by_day.setdefault(applied_on, []).append(app.id or str(idx))

    activity = pd.to_datetime(pd.Series(dated, dtype="object"))
    per_day = activity.value_counts().reindex(window, fill_value=0).astype(int)

    frame = pd.DataFrame({DAY: window.date, COUNT: per_day.to_numpy()}, columns=[DAY, COUNT])
    frame[INTENSITY] = frame[COUNT].map(intensity_level).astype(int)
    frame[WEEKDAY] = [sunday_index(d) for d in frame[DAY]]
    return frame[HEATMAP_DAY_COLS], ids_by_day


def build_application_heatmap(
    applications: Iterable[JobApplication],
    as_of: Optional[dt.date] = None,
    weeks_to_show: int = MAX_WEEKS,
    days: int = DEFAULT_DAYS,
) -> ApplicationHeatmap:
    """
    Build the heatmap grid and its summary stats.

    Args:
        applications: The user's job applications.
        as_of: Last day of the window. Defaults to today.
        weeks_to_show: Week columns to keep, clamped to 1-52.
        days: Length of the trailing window in days.

    Returns:
        ``ApplicationHeatmap`` whose weeks hold seven days each (the last may
        be shorter). Padding days before the window have ``is_empty=True``.
    """
    as_of = as_of or today()
    applications = list(applications)
    frame, ids_by_day = build_day_frame(applications, as_of, days)

    cells: List[HeatmapDay] = []
    if not frame.empty:
        first_day = frame[DAY].iloc[0]
        padding = sunday_index(first_day)
        for offset in range(padding, 0, -1):
            cells.append(HeatmapDay(date=first_day - dt.timedelta(days=offset), is_empty=True))

    for day, count, intensity in zip(frame[DAY], frame[COUNT], frame[INTENSITY]):
        cells.append(
            HeatmapDay(
                date=day,
                count=int(count),
                intensity=int(intensity),
                application_ids=ids_by_day.get(day, []),
            )
        )

    all_weeks = [cells[i:i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]
    keep = max(1, min(MAX_WEEKS, weeks_to_show))

    counts = frame[COUNT]
    heatmap = ApplicationHeatmap(
        weeks=all_weeks[-keep:],
        total_applications=len(applications),
        active_days=int((counts > 0).sum()),
        max_in_one_day=int(counts.max()) if not counts.empty else 0,
    )
    logger.debug(
        f"Heatmap: {heatmap.total_applications} applications, {heatmap.active_days} active days "
        f"in {days}-day window ending {as_of}"
    )
    return heatmap
