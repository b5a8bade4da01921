# -----------------------------------------------------------------------------
# Copyright (c) 2026 influxstore contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
InfluxDB2 datastore for influxstore.
Writes one point per polled metric to an InfluxDB 2.x compatible write API,
after allow-list filtering and field type normalization.
"""

import logging
import math
import re
from numbers import Real
from typing import Any, Dict, Mapping, Optional

from influxdb_client_3 import InfluxDBClient3, WritePrecision, write_client_options
from influxdb_client_3.write_client.client.write_api import SYNCHRONOUS

from influxstore.config import ConfigStore, get_config
from influxstore.config.settings import InfluxDB2Settings
from influxstore.datastore.base import BaseDatastore, WriteResult, device_hostname
from influxstore.datastore.point import DataPoint, FieldValue
from influxstore.stats import Measurement

LOG = logging.getLogger(__name__)

# Tag values may not be empty in line protocol
BLANK_TAG_VALUE = '_blank_'

# Sample value the poller uses for "unknown"
UNKNOWN_VALUE = 'U'

# "time" is a reserved column name in the store
RESERVED_FIELD_RENAMES = {'time': 'rtime'}

NUMERIC_RE = re.compile(r'^\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*$')


def is_numeric(value: Any) -> bool:
    """True for real numbers (not bools) and decimal numeric strings."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Real):
        return True
    if isinstance(value, str):
        return NUMERIC_RE.match(value) is not None
    return False


def force_type(value: Any) -> Optional[Any]:
    """
    Normalize a field value before writing.

    Every number becomes a float: the store rejects a write whose field type
    differs from earlier writes, and integer/float detection is unreliable
    across polls. The "U" sentinel and non-finite numbers become None, meaning
    the field is dropped; line protocol has no encoding for nan or inf.
    """
    if is_numeric(value):
        value = float(value)
        return value if math.isfinite(value) else None
    if value == UNKNOWN_VALUE:
        return None
    return value


def is_empty_tag_value(value: Any) -> bool:
    """Empty in the poller's sense: falsy, or the string "0"."""
    return not value or value == '0'


class InfluxDB2(BaseDatastore):
    """
    Datastore implementation for InfluxDB 2.x.

    Handles:
    - Measurement, tag and field allow-lists
    - A hostname tag taken from the device on every point
    - Float coercion of numeric fields
    - Best-effort writes: failures are logged, never raised to the poller
    """

    def __init__(self, config: Optional[ConfigStore] = None, client: Optional[InfluxDBClient3] = None):
        """
        Initialize the datastore from configuration.

        Args:
            config: Configuration store, the process-wide store if None
            client: Pre-built client, mostly for tests
        """
        super().__init__()
        self.settings = InfluxDB2Settings.from_store(config if config is not None else get_config())
        self.client = client if client is not None else self._create_client()

        LOG.info(f"InfluxDB2 datastore initialized: {self.settings.url} -> {self.settings.org}/{self.settings.bucket}")

    def _create_client(self) -> InfluxDBClient3:
        """Build the client. It connects lazily on first write."""
        try:
            if not self.settings.verify_ssl:
                LOG.warning(f"TLS verification disabled for InfluxDB2 at {self.settings.url}")

            client_kwargs = {
                'host': self.settings.url,
                'org': self.settings.org,
                'database': self.settings.bucket,
                'token': self.settings.token,
                'write_client_options': write_client_options(write_options=SYNCHRONOUS),
                'verify_ssl': self.settings.verify_ssl,
            }
            # 0 keeps the client default
            if self.settings.timeout > 0:
                client_kwargs['timeout'] = self.settings.timeout_ms

            return InfluxDBClient3(**client_kwargs)

        except Exception as e:
            LOG.error(f"Failed to create InfluxDB2 client: {e}")
            raise

    def get_name(self) -> str:
        return 'InfluxDB2'

    @classmethod
    def is_enabled(cls, config: Optional[ConfigStore] = None) -> bool:
        store = config if config is not None else get_config()
        return store.get_bool('influxdb2.enable', False)

    def wants_rrd_tags(self) -> bool:
        return False

    def put(self, device: Any, measurement: str, tags: Mapping[str, Any], fields: Mapping[str, Any]) -> None:
        """
        Filter, coerce and write one metric. Never raises on write failure.

        Args:
            device: Device record exposing a hostname
            measurement: Name of this measurement
            tags: Tags for the data
            fields: The data to write, keyed by field name
        """
        if not self.settings.allowed_measurements.allows(measurement):
            LOG.debug(f"Skipping measurement which was not included in the list of allowed measurements: {measurement}")
            return

        stat = Measurement.start('write')

        point_tags = self.filter_tags(device, tags)
        point_fields = self.filter_fields(fields)

        if not point_fields:
            LOG.warning(f"All fields empty, skipping update: orig_fields={dict(fields)}")
            return

        LOG.info(f"InfluxDB data: measurement={measurement} tags={dict(tags)} fields={dict(fields)}")

        result = self.write_point(DataPoint(measurement, point_tags, point_fields))
        if result.success:
            self.record_statistic(stat.end())
        else:
            LOG.error(f"InfluxDB2 exception: {result.reason}")
            LOG.debug(result.trace)

    def filter_tags(self, device: Any, tags: Mapping[str, Any]) -> Dict[str, str]:
        """Apply the tag allow-list; hostname is always present."""
        point_tags = {'hostname': str(device_hostname(device))}

        for key, value in tags.items():
            if not self.settings.allowed_tags.allows(key):
                LOG.debug(f"Skipping tag which was not included in the list of allowed tags: {key}")
                continue

            point_tags[key] = BLANK_TAG_VALUE if is_empty_tag_value(value) else str(value)

        return point_tags

    def filter_fields(self, fields: Mapping[str, Any]) -> Dict[str, FieldValue]:
        """Apply the field allow-list, rename reserved keys and coerce values."""
        point_fields = {}

        for key, value in fields.items():
            if not self.settings.allowed_fields.allows(key):
                LOG.debug(f"Skipping field which was not included in the list of allowed fields: {key}")
                continue

            key = RESERVED_FIELD_RENAMES.get(key, key)

            value = force_type(value)
            if value is not None:
                point_fields[key] = value

        return point_fields

    def write_point(self, point: DataPoint) -> WriteResult:
        """Submit a single-point write; the outcome is returned, not raised."""
        try:
            self.client.write(record=[point.to_point()], write_precision=WritePrecision.NS)
        except Exception as e:
            return WriteResult.failed(e)
        return WriteResult.ok()

    def close(self) -> None:
        try:
            self.client.close()
            LOG.debug("InfluxDB2 client closed")
        except Exception as e:
            LOG.warning(f"Error closing InfluxDB2 client: {e}")
