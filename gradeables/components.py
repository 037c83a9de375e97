"""The component contract a gradeable holds, plus the stock implementation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Component(Protocol):
    """Structural contract for a gradeable component.

    Validation of point values and mark scoring belong to the component
    itself; a gradeable only checks that each element conforms.
    """

    id: Any
    title: str
    default: float
    max_value: float
    lower_clamp: float
    upper_clamp: float


@dataclass(frozen=True)
class GradeableComponent:
    id: int
    title: str
    default: float = 0.0
    max_value: float = 0.0
    lower_clamp: float = 0.0
    upper_clamp: float = 0.0
    ta_comment: str = ""
    student_comment: str = ""
    text: bool = False
    peer: bool = False
    order: int = 0
    page: int = 0
