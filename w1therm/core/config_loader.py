"""Config loading and validation for YAML-based w1therm settings."""

from __future__ import annotations

import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from w1therm.core.errors import ConfigLoadError, ConfigValidationError
from w1therm.core.model import ReaderConfig

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def _load_schema_validator() -> Any:
    schema_text = resources.files("w1therm.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def default_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "w1therm/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _build_config(doc: dict[str, Any], source: Path) -> ReaderConfig:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    defaults = ReaderConfig()
    topic = doc.get("topic") or ""
    return ReaderConfig(
        devices_path=Path(doc.get("devices_path", defaults.devices_path)),
        masters_path=Path(doc.get("masters_path", defaults.masters_path)),
        bus_master_prefix=doc.get("bus_master_prefix", defaults.bus_master_prefix),
        topic=topic.strip() or defaults.topic,
        array=bool(doc.get("array", defaults.array)),
        poll_interval_s=float(doc.get("poll_interval_s", defaults.poll_interval_s)),
        bulk_read_timeout_s=float(doc.get("bulk_read_timeout_s", defaults.bulk_read_timeout_s)),
        max_workers=int(doc.get("max_workers", defaults.max_workers)),
    )


def load_config(path: Path | None = None) -> ReaderConfig:
    """Load settings from `path`, or from the XDG config file when it exists."""
    if path is None:
        path = default_config_path()
        if not path.is_file():
            return ReaderConfig()

    doc = _read_yaml(path)
    config = _build_config(doc, path)
    LOGGER.debug("Loaded config from %s", path)
    return config
