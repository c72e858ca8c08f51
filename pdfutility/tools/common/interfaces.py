"""Core interfaces and context objects shared by pdfutility tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...core.exceptions import EmptyInputError


@dataclass
class OperationContext:
    """Holds the in-memory inputs and shared state of a tool invocation."""

    data: bytes | None = None
    inputs: list[bytes] = field(default_factory=list)
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.inputs, list):
            self.inputs = list(self.inputs)

    def require_data(self) -> bytes:
        if not self.data:
            raise EmptyInputError("Operation requires a non-empty input document")
        return self.data


class BaseTool:
    """Base class for all pluggable pdfutility tools."""

    name: str

    def __init__(self, context: OperationContext) -> None:
        self.context = context

    def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError

