"""Packaged algorithm descriptors (name, description, complexity table)."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources

import yaml
from pydantic import ValidationError

from sort_viz.errors import ConfigError
from sort_viz.model import AlgorithmDescriptor


CATALOG_RESOURCE = "algorithms.yaml"


def parse_catalog(text: str) -> dict[str, AlgorithmDescriptor]:
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid catalog syntax: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("algorithms"), list):
        raise ConfigError("catalog must be an object with an 'algorithms' list")

    catalog: dict[str, AlgorithmDescriptor] = {}
    for idx, item in enumerate(payload["algorithms"]):
        try:
            descriptor = AlgorithmDescriptor.model_validate(item)
        except ValidationError as exc:
            raise ConfigError(f"algorithms[{idx}]: {exc}") from exc
        if descriptor.id in catalog:
            raise ConfigError(f"duplicate algorithm id '{descriptor.id}'")
        catalog[descriptor.id] = descriptor
    return catalog


@lru_cache(maxsize=1)
def load_catalog() -> dict[str, AlgorithmDescriptor]:
    text = resources.files("sort_viz.data").joinpath(CATALOG_RESOURCE).read_text(encoding="utf-8")
    return parse_catalog(text)


def get_descriptor(algorithm_id: str) -> AlgorithmDescriptor | None:
    return load_catalog().get(algorithm_id)
