"""Run configuration and algorithm catalog models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


SIZE_MIN = 5
SIZE_MAX = 150
DEFAULT_SIZE = 50
VALUE_MIN = 5
VALUE_MAX = 100
SPEED_MIN = 10
SPEED_MAX = 200
DEFAULT_SPEED = 110


def speed_to_delay_ms(speed: int) -> int:
    """Map the speed control to a per-step delay; higher speed = shorter delay."""
    clamped = min(max(int(speed), SPEED_MIN), SPEED_MAX)
    return 210 - clamped


def speed_label(speed: int) -> str:
    if speed < 70:
        return "Slow"
    if speed < 130:
        return "Medium"
    return "Fast"


class ComplexitySpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    time: str
    space: str


class ComplexityTable(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    best: ComplexitySpec
    average: ComplexitySpec
    worst: ComplexitySpec


class AlgorithmDescriptor(BaseModel):
    """Static, read-only metadata for one algorithm."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    description: str
    complexities: ComplexityTable


class SequenceSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    size: int = Field(default=DEFAULT_SIZE, ge=0, le=SIZE_MAX)
    seed: Optional[int] = None
    values: Optional[list[int]] = None

    @model_validator(mode="after")
    def validate_values(self) -> "SequenceSpec":
        if self.values is None:
            if self.size < SIZE_MIN:
                raise ValueError(f"sequence.size must be >= {SIZE_MIN} when values are generated")
            return self
        if len(self.values) > SIZE_MAX:
            raise ValueError(f"sequence.values must hold at most {SIZE_MAX} items")
        self.size = len(self.values)
        return self


class AnimationSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    speed: int = Field(default=DEFAULT_SPEED, ge=SPEED_MIN, le=SPEED_MAX)
    realtime: bool = False

    @property
    def delay_ms(self) -> int:
        return speed_to_delay_ms(self.speed)


class RunSpec(BaseModel):
    """Top-level run configuration."""

    model_config = ConfigDict(extra="forbid")

    version: str
    algorithm: str
    sequence: SequenceSpec = Field(default_factory=SequenceSpec)
    animation: AnimationSpec = Field(default_factory=AnimationSpec)

    @model_validator(mode="after")
    def validate_algorithm(self) -> "RunSpec":
        if not self.algorithm.strip():
            raise ValueError("algorithm must be non-empty")
        return self
