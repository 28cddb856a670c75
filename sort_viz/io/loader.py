"""Run configuration loading, version migration and validation."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import random
from typing import Any

import jsonschema
import yaml
from pydantic import ValidationError

from sort_viz.algorithms import resolve_algorithm_id
from sort_viz.errors import ConfigError, UnknownAlgorithmError
from sort_viz.model import RunSpec
from sort_viz.runtime import generate_sequence

from .schema import RUN_SCHEMA


logger = logging.getLogger(__name__)

_LEGACY_SEQUENCE_KEYS = ("size", "seed", "values")
_LEGACY_ANIMATION_KEYS = ("speed", "realtime")


@dataclass(slots=True)
class ValidationIssue:
    path: str
    message: str


class ConfigLoader:
    """Load and validate run specs from JSON/YAML files."""

    SUPPORTED_VERSION = "0.2"

    def load(self, path: str) -> RunSpec:
        raw = self._read(path)
        return self.load_data(raw)

    def load_data(self, payload: dict[str, Any]) -> RunSpec:
        normalized = self._normalize_version(payload)
        self._validate_schema(normalized)
        try:
            spec = RunSpec.model_validate(normalized)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
        try:
            spec.algorithm = resolve_algorithm_id(spec.algorithm)
        except UnknownAlgorithmError as exc:
            raise ConfigError(str(exc)) from exc
        return spec

    def save(self, spec: RunSpec, path: str) -> None:
        output_path = Path(path)
        payload = spec.model_dump(mode="json", exclude_none=True)
        if output_path.suffix.lower() in {".yaml", ".yml"}:
            output_path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
        else:
            output_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    def validate(self, spec_or_path: RunSpec | str) -> list[ValidationIssue]:
        """Every problem found in a config file, keyed by the offending field."""
        if isinstance(spec_or_path, RunSpec):
            return []
        try:
            payload = self._normalize_version(self._read(spec_or_path))
        except ConfigError as exc:
            return [ValidationIssue(path="<file>", message=str(exc))]
        issues = schema_issues(payload)
        if issues:
            return issues
        try:
            self.load_data(payload)
        except ConfigError as exc:
            issues.append(ValidationIssue(path="<root>", message=str(exc)))
        return issues

    @staticmethod
    def _read(path: str) -> dict[str, Any]:
        input_path = Path(path)
        if not input_path.is_file():
            raise ConfigError(f"config file not found: {path}")
        data = _parse_text(input_path.read_text(encoding="utf-8"), input_path.suffix.lower())
        if not isinstance(data, dict):
            raise ConfigError("config root must be object")
        return data

    def _normalize_version(self, payload: dict[str, Any]) -> dict[str, Any]:
        version = str(payload.get("version", "0.1"))
        if version == self.SUPPORTED_VERSION:
            return dict(payload)
        if version != "0.1":
            raise ConfigError(f"unsupported config version '{version}'")
        logger.debug("migrating flat 0.1 config to %s", self.SUPPORTED_VERSION)
        return _nest_legacy_fields(payload, self.SUPPORTED_VERSION)

    @staticmethod
    def _validate_schema(payload: dict[str, Any]) -> None:
        issues = schema_issues(payload)
        if issues:
            shown = " | ".join(f"{issue.path}: {issue.message}" for issue in issues[:8])
            raise ConfigError("schema validation failed: " + shown)


def _parse_text(text: str, suffix: str) -> Any:
    try:
        return yaml.safe_load(text) if suffix in {".yaml", ".yml"} else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"invalid config syntax: {exc}") from exc


def _nest_legacy_fields(payload: dict[str, Any], version: str) -> dict[str, Any]:
    """0.1 kept sequence and animation fields at the root."""
    nested: dict[str, Any] = {"version": version}
    sections: dict[str, dict[str, Any]] = {}
    for key, value in payload.items():
        if key in _LEGACY_SEQUENCE_KEYS:
            sections.setdefault("sequence", {})[key] = value
        elif key in _LEGACY_ANIMATION_KEYS:
            sections.setdefault("animation", {})[key] = value
        elif key != "version":
            nested[key] = value
    nested.update(sections)
    return nested


def schema_issues(payload: dict[str, Any]) -> list[ValidationIssue]:
    validator = jsonschema.Draft202012Validator(RUN_SCHEMA)
    errors = sorted(validator.iter_errors(payload), key=lambda err: [str(part) for part in err.path])
    return [
        ValidationIssue(path=".".join(str(part) for part in err.path) or "<root>", message=err.message)
        for err in errors
    ]


def resolve_sequence(spec: RunSpec) -> list[int]:
    """Explicit values when configured, otherwise a (seeded) random sequence."""
    if spec.sequence.values is not None:
        return list(spec.sequence.values)
    return generate_sequence(spec.sequence.size, random.Random(spec.sequence.seed))
