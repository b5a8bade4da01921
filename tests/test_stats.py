"""Tests for write statistics."""

from influxstore.stats import Measurement, MeasurementCollection


def test_measurement_end_sets_duration():
    measurement = Measurement.start('write')
    assert measurement.duration is None
    assert measurement.end() is measurement
    assert measurement.duration >= 0.0


def test_measurement_duration_from_explicit_start():
    measurement = Measurement('write', started_at=0.0).end()
    assert measurement.duration > 0.0


def test_collection_summarizes_per_type():
    collection = MeasurementCollection()
    for duration in (0.5, 1.5):
        measurement = Measurement('write')
        measurement.duration = duration
        collection.record(measurement)
    other = Measurement('read')
    other.duration = 0.25
    collection.record(other)

    assert collection.get_summary('write').count == 2
    assert collection.get_summary('write').duration == 2.0
    assert collection.get_count() == 3
    assert collection.get_duration() == 2.25
    assert len(collection) == 2
    assert collection.as_dict() == {
        'write': {'count': 2, 'duration': 2.0},
        'read': {'count': 1, 'duration': 0.25},
    }


def test_unseen_type_has_empty_summary():
    summary = MeasurementCollection().get_summary('write')
    assert summary.count == 0
    assert summary.duration == 0.0
