"""
Base datastore interface for influxstore.
"""

import logging
import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from influxstore.config import ConfigStore
from influxstore.stats import Measurement, MeasurementCollection

# Initialize logger
LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a single write to a datastore."""

    success: bool
    error: Optional[Exception] = None
    trace: str = ''

    @classmethod
    def ok(cls) -> 'WriteResult':
        return cls(success=True)

    @classmethod
    def failed(cls, error: Exception) -> 'WriteResult':
        trace = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        return cls(success=False, error=error, trace=trace)

    @property
    def reason(self) -> str:
        return str(self.error) if self.error is not None else ''


class BaseDatastore(ABC):
    """
    Base class for all datastores.

    Subclasses receive every polled metric through put() and record the
    duration of successful writes with record_statistic().
    """

    def __init__(self):
        self._stats = MeasurementCollection()

    @abstractmethod
    def get_name(self) -> str:
        """Display name of this datastore."""
        pass

    @classmethod
    def is_enabled(cls, config: Optional[ConfigStore] = None) -> bool:
        """
        Whether this datastore is switched on in configuration.
        Default implementation returns False - override in subclasses.
        """
        return False

    @abstractmethod
    def put(self, device: Any, measurement: str, tags: Mapping[str, Any], fields: Mapping[str, Any]) -> None:
        """
        Store one polled metric.

        Args:
            device: Device record exposing a hostname
            measurement: Name of this measurement
            tags: Tags for the data (or to control rrdtool)
            fields: The data to store, keyed by field name
        """
        pass

    def wants_rrd_tags(self) -> bool:
        """Checks if the datastore wants rrd control tags to be sent with put()."""
        return True

    def record_statistic(self, stat: Measurement) -> None:
        self._stats.record(stat)

    def get_stats(self) -> MeasurementCollection:
        return self._stats

    def close(self) -> None:
        """
        Optional method to release client resources.
        Default implementation does nothing - override in subclasses that need cleanup.
        """
        pass


def device_hostname(device: Any) -> str:
    """Hostname of a device given as a mapping or as an object."""
    if isinstance(device, Mapping):
        return device['hostname']
    return device.hostname


def stats_summary(stats: Dict[str, MeasurementCollection]) -> Dict[str, Dict[str, Dict[str, float]]]:
    return {name: collection.as_dict() for name, collection in stats.items()}
