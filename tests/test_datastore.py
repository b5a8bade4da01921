"""Tests for the datastore dispatcher."""

import pytest

from influxstore.config import ConfigStore
from influxstore.datastore import Datastore
from influxstore.datastore.base import BaseDatastore, device_hostname, stats_summary
from influxstore.stats import Measurement


class RecordingStore(BaseDatastore):
    enabled = True
    rrd_tags = True

    def __init__(self, config=None):
        super().__init__()
        self.calls = []
        self.closed = False

    def get_name(self):
        return type(self).__name__

    @classmethod
    def is_enabled(cls, config=None):
        return cls.enabled

    def wants_rrd_tags(self):
        return self.rrd_tags

    def put(self, device, measurement, tags, fields):
        self.calls.append((device, measurement, dict(tags), dict(fields)))
        self.record_statistic(Measurement.start('write').end())

    def close(self):
        self.closed = True


class RrdStore(RecordingStore):
    pass


class PlainStore(RecordingStore):
    rrd_tags = False


class DisabledStore(RecordingStore):
    enabled = False


@pytest.fixture
def config():
    return ConfigStore({}, from_env=False)


def test_from_config_creates_enabled_stores_only(config):
    datastore = Datastore.from_config(config, store_classes=[RrdStore, DisabledStore, PlainStore])
    assert [store.get_name() for store in datastore.stores] == ['RrdStore', 'PlainStore']
    assert len(datastore) == 2


def test_from_config_with_nothing_enabled(config, caplog):
    datastore = Datastore.from_config(config, store_classes=[DisabledStore])
    assert len(datastore) == 0
    assert 'No datastores enabled' in caplog.text


def test_influxdb2_disabled_by_default(config):
    assert len(Datastore.from_config(config)) == 0


def test_rrd_tags_stripped_for_stores_that_do_not_want_them():
    rrd, plain = RrdStore(), PlainStore()
    datastore = Datastore([rrd, plain])
    tags = {'ifName': 'eth0', 'rrd_def': object(), 'rrd_name': ['port', 1], 'rrd_oldname': 'old', 'rrd_step': 300}

    datastore.put({'hostname': 'sw01'}, 'ports', tags, {'ifInOctets': 1})

    assert rrd.calls[0][2] == tags
    assert plain.calls[0][2] == {'ifName': 'eth0'}


def test_scalar_field_paired_with_measurement():
    store = PlainStore()
    Datastore([store]).put({'hostname': 'sw01'}, 'uptime', {}, 1234)
    assert store.calls[0][3] == {'uptime': 1234}


def test_stats_and_close():
    rrd, plain = RrdStore(), PlainStore()
    datastore = Datastore([rrd, plain])
    datastore.put({'hostname': 'sw01'}, 'ports', {}, {'a': 1})

    stats = datastore.get_stats()
    assert set(stats) == {'RrdStore', 'PlainStore'}
    assert stats_summary(stats)['PlainStore']['write']['count'] == 1

    datastore.close()
    assert rrd.closed and plain.closed


def test_base_defaults():
    assert RecordingStore().get_stats().get_count() == 0
    assert BaseDatastore.is_enabled() is False


def test_device_hostname():
    class Device:
        hostname = 'router7'

    assert device_hostname({'hostname': 'sw01'}) == 'sw01'
    assert device_hostname(Device()) == 'router7'
