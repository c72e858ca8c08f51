"""Plugin registry and orchestration helpers for pdfutility tools."""

from __future__ import annotations

from typing import Dict, Iterable

from .interfaces import BaseTool, OperationContext


class ToolRegistry:
    """Registry storing available pdfutility tools."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = tool_class

    def create(self, name: str, context: OperationContext) -> BaseTool:
        try:
            tool_class = self._tools[name]
        except KeyError as exc:
            available = ", ".join(self.names())
            raise KeyError(f"Tool '{name}' is not registered (available: {available})") from exc
        return tool_class(context)

    def run(self, name: str, context: OperationContext):
        """Create the tool ``name`` for ``context`` and run it."""

        return self.create(name, context).run()

    def names(self) -> Iterable[str]:
        return sorted(self._tools.keys())


registry = ToolRegistry()


def register_tool(name: str):
    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool", "OperationContext", "BaseTool"]
