"""
Data point built by the InfluxDB2 datastore for each put() call.
"""

from dataclasses import dataclass, field
from typing import Dict, Union

from influxdb_client_3 import Point

FieldValue = Union[float, str]


@dataclass(frozen=True)
class DataPoint:
    """One measurement with its filtered tags and fields. No timestamp; the server assigns it."""

    measurement: str
    tags: Dict[str, str] = field(default_factory=dict)
    fields: Dict[str, FieldValue] = field(default_factory=dict)

    def to_point(self) -> Point:
        """Convert to an influxdb_client_3 Point."""
        point = Point(self.measurement)
        for tag_key, tag_value in self.tags.items():
            point = point.tag(tag_key, tag_value)
        for field_key, field_value in self.fields.items():
            point = point.field(field_key, field_value)
        return point

    def to_line_protocol(self) -> str:
        return self.to_point().to_line_protocol()
