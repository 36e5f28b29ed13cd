"""ToolRegistry — the immutable, ordered tool catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mcptime.protocol.models import ToolDescriptor


class ToolRegistry:
    """Maps tool names to descriptors while keeping insertion order.

    The order is part of the ``tools/list`` contract, so :meth:`list`
    always returns the descriptors in the order they were given.
    """

    def __init__(self, descriptors: Iterable[ToolDescriptor]) -> None:
        self._descriptors: tuple[ToolDescriptor, ...] = tuple(descriptors)
        self._by_name: dict[str, ToolDescriptor] = {}
        for descriptor in self._descriptors:
            if descriptor.name in self._by_name:
                msg = f"Duplicate tool name: {descriptor.name}"
                raise ValueError(msg)
            self._by_name[descriptor.name] = descriptor

    def list(self) -> list[ToolDescriptor]:
        """Return every descriptor, in catalog order."""
        return list(self._descriptors)

    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def get(self, name: str) -> ToolDescriptor | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._descriptors)
