"""Load and save endpoint config files (JSON or YAML, chosen by extension)."""

import json
from pathlib import Path

import pydantic
import yaml

from api_types_gen.errors import ConfigError
from api_types_gen.spec.base import EndpointSpec

YAML_SUFFIXES = (".yaml", ".yml")


def load_config(config_path: Path | str) -> list[EndpointSpec]:
    """Parse a config file into an ordered list of EndpointSpec.

    The root is either a list of endpoint mappings or a mapping with an
    ``apis`` list.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path.resolve()}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("apis")
    if not isinstance(data, list):
        raise ConfigError(f"Config file {path} must contain a list of endpoints")

    specs = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ConfigError(f"Endpoint #{index + 1} in {path} must be a mapping")
        try:
            specs.append(EndpointSpec(**item))
        except pydantic.ValidationError as e:
            raise ConfigError(f"Endpoint #{index + 1} in {path} is invalid: {e}") from e
    return specs


def save_config(specs: list[EndpointSpec], config_path: Path | str) -> None:
    """Write endpoint specs to a config file, format chosen by extension."""
    path = Path(config_path)
    data = [spec.model_dump(by_alias=True, exclude_defaults=True) for spec in specs]
    if path.suffix.lower() in YAML_SUFFIXES:
        content = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
