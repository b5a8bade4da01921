# -----------------------------------------------------------------------------
# Copyright (c) 2026 influxstore contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from influxstore.allowlist import AllowList
from influxstore.config import ConfigStore

DEFAULT_HOST = 'localhost'
DEFAULT_PORT = 8086
DEFAULT_BUCKET = 'librenms'
DEFAULT_ORG = 'librenms'


class EnvConfig(BaseSettings):
    """Process settings taken from INFLUXSTORE_* environment variables or .env."""

    model_config = SettingsConfigDict(env_prefix='INFLUXSTORE_', env_file='.env', extra='ignore')

    config_file: Optional[str] = None
    log_level: str = Field(default='INFO')
    log_file: Optional[str] = None


class InfluxDB2Settings(BaseModel):
    """
    Immutable InfluxDB2 datastore settings.

    Built once from the configuration store; allow-lists are parsed here so
    the write path only does set lookups.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    enable: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    bucket: str = DEFAULT_BUCKET
    org: str = DEFAULT_ORG
    timeout: float = Field(default=0, ge=0)
    token: str = ''
    verify_ssl: bool = Field(default=True, alias='verifySSL')
    allowed_measurements: AllowList = Field(default_factory=AllowList)
    allowed_tags: AllowList = Field(default_factory=lambda: AllowList('', case_insensitive=True))
    allowed_fields: AllowList = Field(default_factory=lambda: AllowList('', case_insensitive=True))

    @field_validator('allowed_measurements', mode='before')
    @classmethod
    def _parse_measurements(cls, value):
        if isinstance(value, AllowList):
            return value
        return AllowList(value)

    @field_validator('allowed_tags', 'allowed_fields', mode='before')
    @classmethod
    def _parse_keys(cls, value):
        if isinstance(value, AllowList):
            return value
        return AllowList(value, case_insensitive=True)

    @field_validator('host', 'bucket', 'org', 'token', mode='before')
    @classmethod
    def _none_to_empty(cls, value):
        return '' if value is None else value

    @property
    def url(self) -> str:
        """Client URL; a bare host gets http://."""
        host = self.host.rstrip('/')
        if '://' not in host:
            host = f"http://{host}"
        return f"{host}:{self.port}"

    @property
    def timeout_ms(self) -> int:
        return int(self.timeout * 1000)

    @classmethod
    def from_store(cls, store: ConfigStore) -> 'InfluxDB2Settings':
        """Resolve every influxdb2.* key; a key present with a null value takes the default."""
        def get(key, default):
            value = store.get(key, default)
            return default if value is None else value

        return cls(
            enable=store.get_bool('influxdb2.enable', False),
            host=get('influxdb2.host', DEFAULT_HOST),
            port=get('influxdb2.port', DEFAULT_PORT),
            bucket=get('influxdb2.bucket', DEFAULT_BUCKET),
            org=get('influxdb2.org', DEFAULT_ORG),
            timeout=get('influxdb2.timeout', 0),
            token=get('influxdb2.token', ''),
            verify_ssl=store.get_bool('influxdb2.verifySSL', True),
            allowed_measurements=get('influxdb2.allowed_measurements', ''),
            allowed_tags=get('influxdb2.allowed_tags', ''),
            allowed_fields=get('influxdb2.allowed_fields', ''),
        )
