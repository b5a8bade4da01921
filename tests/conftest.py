import os

import pytest

from influxstore.config import ConfigStore, set_config
from influxstore.datastore.influxdb2 import InfluxDB2


class FakeClient:
    """Stand-in for InfluxDBClient3 that records writes."""

    def __init__(self, error=None):
        self.error = error
        self.writes = []
        self.closed = False

    def write(self, record=None, database=None, **kwargs):
        if self.error is not None:
            raise self.error
        self.writes.append((record, kwargs))

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in list(os.environ):
        if name.startswith('INFLUXDB2_') or name.startswith('INFLUXSTORE_'):
            monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def make_store(fake_client, monkeypatch):
    """Build an InfluxDB2 store over a FakeClient; built points land in store.points."""

    def _make(client=None, **settings):
        store = InfluxDB2(ConfigStore({'influxdb2': settings}, from_env=False),
                          client=client if client is not None else fake_client)
        store.points = []
        write_point = store.write_point

        def recording_write_point(point):
            store.points.append(point)
            return write_point(point)

        monkeypatch.setattr(store, 'write_point', recording_write_point)
        return store

    return _make
