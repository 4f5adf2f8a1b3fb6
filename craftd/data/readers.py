# craftd/data/readers.py
"""
Functions for reading career data files (work history, career events,
job applications).

YAML and JSON files hold a mapping with ``work_experiences``,
``career_events`` and ``applications`` lists. CSV files hold one employment
period per row.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Type, TypeVar, Union

import pandas as pd
import yaml
from pydantic import BaseModel, ValidationError

from craftd.schema.models import CareerEvent, EmploymentPeriod, JobApplication
from craftd.utils.columns import PERIOD_DATE_COLS

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

WORK_EXPERIENCES_KEY = "work_experiences"
CAREER_EVENTS_KEY = "career_events"
APPLICATIONS_KEY = "applications"


class DataReadError(Exception):
    """Custom exception for errors during data reading."""

    pass


@dataclass
class CareerData:
    """Everything read from one data file."""

    periods: List[EmploymentPeriod] = field(default_factory=list)
    events: List[CareerEvent] = field(default_factory=list)
    applications: List[JobApplication] = field(default_factory=list)
    skipped: int = 0


def parse_records(rows: Iterable[Dict[str, Any]], model: Type[M], label: str) -> List[M]:
    """
    Validate raw rows into models, skipping the ones that fail.

    A bad row is logged and dropped so the rest of the history still loads.
    """
    records: List[M] = []
    for idx, row in enumerate(rows):
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {label} record #{idx}: {e.error_count()} error(s)")
            logger.debug(f"Validation detail for {label} #{idx}: {e}")
    return records


def _read_mapping(file_path: Path) -> Dict[str, Any]:
    with open(file_path, "r", encoding="utf-8") as f:
        if file_path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataReadError(f"Expected a mapping at the top of {file_path}, got {type(data).__name__}")
    return data


def read_periods_csv(file_path: Path) -> pd.DataFrame:
    """Read employment periods from CSV, parsing the date columns present."""
    cols_in_csv = pd.read_csv(file_path, nrows=0).columns.tolist()
    parse_dates_present = [c for c in PERIOD_DATE_COLS if c in cols_in_csv]
    logger.debug(f"Attempting to parse date columns in CSV: {parse_dates_present}")
    df = pd.read_csv(file_path, parse_dates=parse_dates_present)
    for col in parse_dates_present:
        if pd.api.types.is_object_dtype(df[col]):
            logger.warning(f"Column '{col}' could not be fully parsed as dates; coercing invalid values to NaT")
            df[col] = pd.to_datetime(df[col], errors="coerce")
    logger.info(f"Loaded {len(df)} employment periods from CSV: {file_path}")
    return df


def _frame_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    # NaN / NaT become None so optional fields validate as missing
    return df.astype(object).where(pd.notna(df), None).to_dict(orient="records")


def _section(raw: Dict[str, Any], key: str, file_path: Path) -> List[Any]:
    """A top-level record list; a missing or null section is empty."""
    records = raw.get(key)
    if records is None:
        return []
    if not isinstance(records, list):
        logger.error(f"Section '{key}' in {file_path} is a {type(records).__name__}, expected a list")
        raise DataReadError(f"Section '{key}' in {file_path} must be a list, got {type(records).__name__}")
    return records


def read_career_data(file_path: Union[str, Path]) -> CareerData:
    """
    Read a career data file.

    Args:
        file_path: ``.yaml``/``.yml``, ``.json`` or ``.csv`` file.

    Returns:
        ``CareerData`` with validated records; invalid records are skipped and
        counted in ``skipped``.

    Raises:
        DataReadError: If the file is missing, unreadable or of an unsupported
            type, or a section is not a list.
    """
    file_path = Path(file_path)
    logger.info(f"Attempting to read career data from: {file_path}")

    if not file_path.exists():
        logger.error(f"Career data file not found: {file_path}")
        raise DataReadError(f"Career data file not found: {file_path}")

    suffix = file_path.suffix.lower()
    try:
        if suffix == ".csv":
            raw = {WORK_EXPERIENCES_KEY: _frame_records(read_periods_csv(file_path))}
        elif suffix in (".yaml", ".yml", ".json"):
            raw = _read_mapping(file_path)
        else:
            logger.error(f"Unsupported career data format: {file_path}. Use .yaml, .json or .csv.")
            raise DataReadError(f"Unsupported career data format: {file_path.suffix}")
    except DataReadError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.exception(f"Error reading career data from {file_path}")
        raise DataReadError(f"Error reading career data from {file_path}") from e

    raw_periods = _section(raw, WORK_EXPERIENCES_KEY, file_path)
    raw_events = _section(raw, CAREER_EVENTS_KEY, file_path)
    raw_apps = _section(raw, APPLICATIONS_KEY, file_path)

    data = CareerData(
        periods=parse_records(raw_periods, EmploymentPeriod, "work experience"),
        events=parse_records(raw_events, CareerEvent, "career event"),
        applications=parse_records(raw_apps, JobApplication, "application"),
    )
    data.skipped = (
        len(raw_periods) + len(raw_events) + len(raw_apps)
        - len(data.periods) - len(data.events) - len(data.applications)
    )
    if data.skipped:
        logger.warning(f"Skipped {data.skipped} invalid record(s) in {file_path}")

    logger.info(
        f"Read {len(data.periods)} work experiences, {len(data.events)} career events "
        f"and {len(data.applications)} applications from {file_path}"
    )
    return data
