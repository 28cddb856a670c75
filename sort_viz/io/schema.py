"""JSON schema for run configuration structure validation."""

from __future__ import annotations

from sort_viz.model import SIZE_MAX, SPEED_MAX, SPEED_MIN

RUN_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Sort Visualizer Run Config",
    "type": "object",
    "required": ["version", "algorithm"],
    "properties": {
        "version": {"type": "string"},
        "algorithm": {"type": "string", "minLength": 1},
        "sequence": {
            "type": "object",
            "properties": {
                "size": {"type": "integer", "minimum": 0, "maximum": SIZE_MAX},
                "seed": {"type": ["integer", "null"]},
                "values": {
                    "type": "array",
                    "maxItems": SIZE_MAX,
                    "items": {"type": "integer"},
                },
            },
            "additionalProperties": False,
        },
        "animation": {
            "type": "object",
            "properties": {
                "speed": {"type": "integer", "minimum": SPEED_MIN, "maximum": SPEED_MAX},
                "realtime": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}
