"""
influxstore: forwards polled device metrics to an InfluxDB 2.x compatible store.
"""

__version__ = "1.0.0"
