"""
Datastores that receive polled metrics.
"""

from influxstore.datastore.base import BaseDatastore, WriteResult
from influxstore.datastore.factory import Datastore
from influxstore.datastore.influxdb2 import InfluxDB2, force_type
from influxstore.datastore.point import DataPoint

__all__ = ['BaseDatastore', 'DataPoint', 'Datastore', 'InfluxDB2', 'WriteResult', 'force_type']
