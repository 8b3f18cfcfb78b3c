import json
import logging
from pathlib import Path
from typing import List, Protocol

from tubescraper.adapters.base import VideoDetailRecord

logger = logging.getLogger(__name__)


class DatasetSink(Protocol):
    def push(self, record: VideoDetailRecord) -> None: ...


class ListSink:
    """Keeps records in memory, in push order."""

    def __init__(self):
        self.records: List[VideoDetailRecord] = []

    def push(self, record: VideoDetailRecord) -> None:
        self.records.append(record)


class JsonLinesSink:
    """Appends one JSON object per record and flushes immediately, so
    records pushed before a crash are kept."""

    def __init__(self, path):
        self.path = Path(path)
        self.count = 0
        self._fh = None

    def open(self) -> "JsonLinesSink":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self.path, "a", encoding="utf-8")
        return self

    def push(self, record: VideoDetailRecord) -> None:
        if self._fh is None:
            self.open()
        self._fh.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
        self._fh.flush()
        self.count += 1

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.info("[OK] Wrote %d records -> %s", self.count, self.path)

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()
