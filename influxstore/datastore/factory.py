"""
Datastore factory and dispatcher for influxstore.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from influxstore.config import ConfigStore, get_config
from influxstore.datastore.base import BaseDatastore
from influxstore.datastore.influxdb2 import InfluxDB2
from influxstore.stats import MeasurementCollection

# Initialize logger
LOG = logging.getLogger(__name__)

# Registered datastore backends, in dispatch order
STORES: List[Type[BaseDatastore]] = [InfluxDB2]

# Tags that only control round-robin-database backends
RRD_TAGS = ('rrd_def', 'rrd_name', 'rrd_oldname', 'rrd_step')


class Datastore:
    """
    Dispatches every polled metric to all enabled datastores.
    """

    def __init__(self, stores: Sequence[BaseDatastore]):
        self.stores = list(stores)

    @classmethod
    def from_config(cls, config: Optional[ConfigStore] = None,
                    store_classes: Optional[Sequence[Type[BaseDatastore]]] = None) -> 'Datastore':
        """
        Create a dispatcher with one instance of each enabled backend.

        Args:
            config: Configuration store, the process-wide store if None
            store_classes: Backends to consider, defaults to STORES
        """
        config = config if config is not None else get_config()
        stores = []
        for store_class in (store_classes if store_classes is not None else STORES):
            if store_class.is_enabled(config):
                store = store_class(config)
                LOG.info(f"Enabled datastore: {store.get_name()}")
                stores.append(store)
            else:
                LOG.debug(f"Datastore disabled: {store_class.__name__}")

        if not stores:
            LOG.warning("No datastores enabled")
        return cls(stores)

    def put(self, device: Any, measurement: str, tags: Mapping[str, Any], fields: Any) -> None:
        """
        Send one metric to every store.

        A single value instead of a field mapping is paired with the
        measurement name. Stores that do not want rrd tags get them stripped.
        """
        if not isinstance(fields, Mapping):
            fields = {measurement: fields}

        filtered_tags = {key: value for key, value in tags.items() if key not in RRD_TAGS}

        for store in self.stores:
            store_tags = tags if store.wants_rrd_tags() else filtered_tags
            store.put(device, measurement, store_tags, fields)

    def get_stats(self) -> Dict[str, MeasurementCollection]:
        return {store.get_name(): store.get_stats() for store in self.stores}

    def close(self) -> None:
        for store in self.stores:
            store.close()

    def __len__(self) -> int:
        return len(self.stores)
