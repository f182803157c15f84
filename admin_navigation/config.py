from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

_DEFAULT_ENV = "development"
_ENV_KEY = "FLASK_ENV"
_VALID_ENVS = {"development", "testing", "production"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_VALID_OPTION_STORES = {"database", "json", "memory"}


@dataclass(frozen=True)
class EnvironmentInfo:
    name: str
    source: str
    raw_value: str


class EnvReader:
    def __init__(self, data: Mapping[str, str] | None = None):
        self._data = dict(os.environ if data is None else data)
        self.warnings: list[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def _value(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is None:
            return None
        stripped = value.strip()
        return stripped if stripped else None

    def str(self, key: str, default: str | None = None) -> str | None:
        value = self._value(key)
        return value if value is not None else default

    def bool(self, key: str, default: bool = False) -> bool:
        value = self._value(key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        self.warn(f"{key} expected boolean but received {value!r}; falling back to {default}.")
        return default

    def list(self, key: str, default: tuple[str, ...] = ()) -> tuple[str, ...]:
        value = self._value(key)
        if value is None:
            return default
        return tuple(item.strip() for item in value.split(",") if item.strip())

    def choice(self, key: str, choices: set[str], default: str) -> str:
        value = self._value(key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in choices:
            return lowered
        self.warn(f"{key} expected one of {sorted(choices)} but received {value!r}; falling back to {default}.")
        return default


def _resolve_environment(reader: EnvReader) -> EnvironmentInfo:
    raw_value = reader.str(_ENV_KEY, _DEFAULT_ENV) or _DEFAULT_ENV
    normalized = raw_value.strip().lower()
    if normalized not in _VALID_ENVS:
        raise RuntimeError(f"Invalid {_ENV_KEY}={raw_value!r}. Expected one of {sorted(_VALID_ENVS)}.")
    return EnvironmentInfo(name=normalized, source=_ENV_KEY, raw_value=raw_value)


env = EnvReader()
ENV_INFO = _resolve_environment(env)


class BaseConfig:
    FLASK_ENV = ENV_INFO.name
    SECRET_KEY = env.str("FLASK_SECRET_KEY", "devkey-please-change-in-production")
    WTF_CSRF_ENABLED = True

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = env.str("DATABASE_URL", "sqlite:///admin_navigation.db")

    LOG_LEVEL = env.str("LOG_LEVEL", "WARNING") or "WARNING"

    # Option persistence: "database", "json" or "memory".
    OPTION_STORE = env.choice("OPTION_STORE", _VALID_OPTION_STORES, "database")
    OPTIONS_FILE = env.str("OPTIONS_FILE", "options.json")

    # Host/companion versions consulted by the compatibility probe.
    HOST_VERSION = env.str("HOST_VERSION")
    COMPANION_PLUGIN_ACTIVE = env.bool("COMPANION_PLUGIN_ACTIVE", False)
    COMPANION_PLUGIN_VERSION = env.str("COMPANION_PLUGIN_VERSION")

    ADMIN_FEATURES = env.list("ADMIN_FEATURES", ("navigation",))
    NAVIGATION_MANAGED_PREFIX = env.str("NAVIGATION_MANAGED_PREFIX", "/admin/store/")
    ADMIN_RTL = env.bool("ADMIN_RTL", False)

    ASSET_BASE_URL = env.str("ASSET_BASE_URL", "/static/dist")
    ASSET_VERSION = env.str("ASSET_VERSION", "")


class DevelopmentConfig(BaseConfig):
    ENV = "development"
    DEBUG = True


class TestingConfig(BaseConfig):
    ENV = "testing"
    TESTING = True
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    OPTION_STORE = "database"
    HOST_VERSION = "5.6.0"
    COMPANION_PLUGIN_ACTIVE = False
    COMPANION_PLUGIN_VERSION = None
    ADMIN_FEATURES = ("navigation", "analytics")
    ASSET_VERSION = "test"


class ProductionConfig(BaseConfig):
    ENV = "production"
    DEBUG = False
    TESTING = False
    LOG_LEVEL = env.str("LOG_LEVEL", "INFO") or "INFO"


config_map = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config():
    return config_map[ENV_INFO.name]


Config = get_config()
ENV_DIAGNOSTICS = {
    "active": ENV_INFO.name,
    "source": ENV_INFO.source,
    "warnings": tuple(env.warnings),
}
