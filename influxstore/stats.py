# -----------------------------------------------------------------------------
# Copyright (c) 2026 influxstore contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Write statistics for datastores.

A Measurement times one operation; a MeasurementCollection keeps a count and
the accumulated duration per operation type.
"""

import time
from typing import Dict, Iterator, Optional


class Measurement:
    """Timer for a single datastore operation."""

    def __init__(self, type: str, started_at: Optional[float] = None):
        self.type = type
        self.started_at = time.perf_counter() if started_at is None else started_at
        self.duration: Optional[float] = None

    @classmethod
    def start(cls, type: str) -> 'Measurement':
        return cls(type)

    def end(self) -> 'Measurement':
        """Stop the timer and return self so it can be recorded directly."""
        self.duration = time.perf_counter() - self.started_at
        return self

    def __repr__(self) -> str:
        return f"Measurement(type={self.type!r}, duration={self.duration!r})"


class MeasurementSummary:
    """Count and total duration of one operation type."""

    def __init__(self, type: str):
        self.type = type
        self.count = 0
        self.duration = 0.0

    def add(self, measurement: Measurement) -> None:
        self.count += 1
        self.duration += measurement.duration or 0.0

    def as_dict(self) -> Dict[str, float]:
        return {'count': self.count, 'duration': self.duration}


class MeasurementCollection:
    """
    Per-type summaries of recorded measurements.

    Only ended measurements should be recorded; an unended measurement counts
    but adds no duration.
    """

    def __init__(self):
        self._summaries: Dict[str, MeasurementSummary] = {}

    def record(self, measurement: Measurement) -> None:
        summary = self._summaries.get(measurement.type)
        if summary is None:
            summary = MeasurementSummary(measurement.type)
            self._summaries[measurement.type] = summary
        summary.add(measurement)

    def get_summary(self, type: str) -> MeasurementSummary:
        return self._summaries.get(type, MeasurementSummary(type))

    def get_count(self) -> int:
        return sum(summary.count for summary in self._summaries.values())

    def get_duration(self) -> float:
        return sum(summary.duration for summary in self._summaries.values())

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        return {type: summary.as_dict() for type, summary in self._summaries.items()}

    def __iter__(self) -> Iterator[MeasurementSummary]:
        return iter(self._summaries.values())

    def __len__(self) -> int:
        return len(self._summaries)
