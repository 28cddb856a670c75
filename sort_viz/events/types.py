"""Step event definitions."""

from __future__ import annotations

import json
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StepKind(str, Enum):
    COMPARE = "Compare"
    SWAP = "Swap"
    OVERWRITE = "Overwrite"
    MARK_SORTED = "MarkSorted"
    MARK_PIVOT = "MarkPivot"


class StepEvent(BaseModel):
    """One observable unit of algorithm work plus the state needed to draw it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    seq: int = Field(ge=0)
    run_id: str
    algorithm: str
    kind: StepKind
    indices: tuple[int, ...] = ()
    sequence: tuple[int, ...]
    sorted_indices: tuple[int, ...] = ()
    pivot_index: Optional[int] = None
    comparisons: int = Field(ge=0)
    swaps: int = Field(ge=0)
    operation: str = ""

    @property
    def swapping(self) -> bool:
        return self.kind in (StepKind.SWAP, StepKind.OVERWRITE)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False)
