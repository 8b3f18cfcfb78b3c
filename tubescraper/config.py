"""Run configuration: delays, collection bounds, browser settings and input loading."""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence

from tubescraper.errors import ConfigError
from tubescraper.utils.relative_time import cutoff_from_date

DEFAULT_TARGET_COUNT = 20


@dataclass(frozen=True)
class Delays:
    """Named pauses (ms) used to pace interaction with the page."""

    page_load: int = 6000
    partial_page_load: int = 3000
    scroll: int = 2500
    click: int = 1500
    short: int = 500
    long: int = 20000

    @classmethod
    def none(cls) -> "Delays":
        return cls(page_load=0, partial_page_load=0, scroll=0, click=0, short=0, long=0)


@dataclass(frozen=True)
class CollectionConfig:
    target_count: int = DEFAULT_TARGET_COUNT
    cutoff: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.target_count, bool) or not isinstance(self.target_count, int):
            raise ConfigError(f"target_count must be an integer, got {self.target_count!r}")
        if self.target_count <= 0:
            raise ConfigError(f"target_count must be > 0, got {self.target_count}")


@dataclass(frozen=True)
class RunSettings:
    headless: bool = True
    slow_mo_ms: int = 0
    storage_state: Optional[str] = None
    delays: Delays = field(default_factory=Delays)
    max_rounds: int = 200                 # Upper bound on scroll rounds per term
    stagnant_tolerance: int = 8           # Rounds without new cards before giving up
    navigation_timeout_ms: int = 30000


@dataclass
class RunInput:
    keywords: List[str]
    max_count: int = DEFAULT_TARGET_COUNT
    cutoff_date: Optional[date] = None

    def collection_config(self) -> CollectionConfig:
        cutoff = cutoff_from_date(self.cutoff_date) if self.cutoff_date else None
        return CollectionConfig(target_count=self.max_count, cutoff=cutoff)


def parse_cutoff_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ConfigError(f"Invalid cutoff date {value!r}, expected YYYY-MM-DD") from e


def load_input(
    path: Optional[str] = None,
    keywords: Optional[Sequence[str]] = None,
    max_count: Optional[int] = None,
    cutoff_date: Optional[str] = None,
) -> RunInput:
    """Merge an input JSON file with command line overrides.

    The file uses the dataset-actor shape::

        {"keywords": ["a", "b"], "maxCount": 20, "cutoffDate": "2024-05-01"}

    Values passed explicitly win over the file.
    """
    data = {}
    if path:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read input file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Input file {path} must contain a JSON object")

    terms = list(keywords) if keywords else data.get("keywords") or []
    if not isinstance(terms, list) or not all(isinstance(t, str) for t in terms):
        raise ConfigError("keywords must be a list of strings")
    terms = [t.strip() for t in terms if t and t.strip()]
    if not terms:
        raise ConfigError("At least one keyword is required")

    count = max_count if max_count is not None else data.get("maxCount", DEFAULT_TARGET_COUNT)
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise ConfigError(f"maxCount must be a positive integer, got {count!r}")

    cutoff = parse_cutoff_date(cutoff_date if cutoff_date else data.get("cutoffDate"))

    return RunInput(keywords=terms, max_count=count, cutoff_date=cutoff)
