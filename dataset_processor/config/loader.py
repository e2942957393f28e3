from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load the YAML config (default ``config/processor.yml``)
- Validate it against the JSON schema shipped next to this module
- Apply defaults for every missing section / key

Resolution order for the config path: explicit ``--config`` argument, then
``$DATASET_PROCESSOR_CONFIG``, then ``config/processor.yml``. Only an explicitly
requested file is required to exist.
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/processor.yml")
CONFIG_ENV_VAR = "DATASET_PROCESSOR_CONFIG"

DEFAULT_THRESHOLDS = {"A": 90.0, "B": 75.0, "C": 60.0}
DEFAULT_CATALOG = {"apple": 30.0, "banana": 10.0, "milk": 25.5, "bread": 40.0}
DEFAULT_PAYMENT_METHODS = ("cash", "card", "upi")
DEFAULT_COLLECTION = {"Alice": 25, "Bob": 30}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class GradesConfig:
    thresholds: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_THRESHOLDS))
    fallback_grade: str = "D"


@dataclass(frozen=True)
class CartConfig:
    catalog: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_CATALOG))
    discount_base: float = 5.0
    discount_step: float = 5.0
    payment_methods: tuple[str, ...] = DEFAULT_PAYMENT_METHODS


@dataclass(frozen=True)
class DevicesConfig:
    interface: str = "eth0"
    prefix_length: int = 24
    enable_secret: str = "admin123"


@dataclass(frozen=True)
class CollectionsConfig:
    mapping: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_COLLECTION))


@dataclass(frozen=True)
class ProcessorConfig:
    duplicate_policy: str = "reject"  # reject | overwrite
    error_log_dir: str = "./logs"
    grades: GradesConfig = field(default_factory=GradesConfig)
    cart: CartConfig = field(default_factory=CartConfig)
    devices: DevicesConfig = field(default_factory=DevicesConfig)
    collections: CollectionsConfig = field(default_factory=CollectionsConfig)


def default_config() -> ProcessorConfig:
    return ProcessorConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the
            config data fails validation (unknown keys, wrong types, ...)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_config(data: dict[str, Any]) -> ProcessorConfig:
    grades_raw = data.get("grades", {})
    cart_raw = data.get("cart", {})
    devices_raw = data.get("devices", {})
    collections_raw = data.get("collections", {})

    grades = GradesConfig(
        thresholds={k: float(v) for k, v in grades_raw.get("thresholds", DEFAULT_THRESHOLDS).items()},
        fallback_grade=grades_raw.get("fallback_grade", "D"),
    )
    cart = CartConfig(
        catalog={k: float(v) for k, v in cart_raw.get("catalog", DEFAULT_CATALOG).items()},
        discount_base=float(cart_raw.get("discount_base", 5.0)),
        discount_step=float(cart_raw.get("discount_step", 5.0)),
        # 大文字小文字を区別しない
        payment_methods=tuple(m.lower() for m in cart_raw.get("payment_methods", DEFAULT_PAYMENT_METHODS)),
    )
    devices = DevicesConfig(
        interface=devices_raw.get("interface", "eth0"),
        prefix_length=devices_raw.get("prefix_length", 24),
        enable_secret=devices_raw.get("enable_secret", "admin123"),
    )
    collections = CollectionsConfig(
        mapping=dict(collections_raw.get("mapping", DEFAULT_COLLECTION)),
    )
    return ProcessorConfig(
        duplicate_policy=data.get("duplicate_policy", "reject"),
        error_log_dir=data.get("error_log_dir", "./logs"),
        grades=grades,
        cart=cart,
        devices=devices,
        collections=collections,
    )


def load_config(path: Path) -> ProcessorConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)
    return _build_config(data)


def resolve_config(explicit: Path | None = None) -> ProcessorConfig:
    """Load the config following the resolution order described above.

    Falls back to built-in defaults only when no path was requested and the
    default file does not exist.
    """
    if explicit is not None:
        return load_config(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()
