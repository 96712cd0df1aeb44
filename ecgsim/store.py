from __future__ import annotations
from typing import Iterator, List

import pandas as pd

from .ecg import Record
from .errors import OutOfRange
from .export import records_to_frame

class RecordStore:
    """Append-only record sequence with a navigation cursor.

    Cursor moves are clamped to the generated range: stepping past either end
    leaves the cursor on the first/last record.
    """

    def __init__(self):
        self._records: List[Record] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def append(self, record: Record) -> None:
        self._records.append(record)

    def get(self, index: int) -> Record:
        if not 0 <= index < len(self._records):
            raise OutOfRange(f"record {index} outside [0, {len(self._records) - 1}]")
        return self._records[index]

    @property
    def cursor(self) -> int:
        return self._cursor

    def current(self) -> Record:
        if not self._records:
            raise OutOfRange("no records generated yet")
        return self._records[self._cursor]

    def move_cursor(self, delta: int) -> int:
        if not self._records:
            raise OutOfRange("cannot move cursor over an empty store")
        self._cursor = max(0, min(len(self._records) - 1, self._cursor + int(delta)))
        return self._cursor

    def remaining_ahead(self) -> int:
        """Records generated after the cursor."""
        return max(0, len(self._records) - 1 - self._cursor)

    def to_frame(self) -> pd.DataFrame:
        """Record metadata, one row per record (samples excluded)."""
        return records_to_frame(self._records)
