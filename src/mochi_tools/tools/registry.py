"""Tool registry.

The registry generates each tool's specification once, when the tool is
registered, so schema problems surface at build time rather than in the
middle of a conversation. After ``freeze()`` the registry is read-only and
can be shared by concurrent chat calls.
"""

import logging
from typing import Iterable

from mochi_tools.exceptions import (
    DuplicateToolNameError,
    RegistryFrozenError,
    UnknownToolError,
)
from mochi_tools.schema.generator import SchemaGenerator
from mochi_tools.schema.shapes import ObjectShape, collect_object_shapes
from mochi_tools.tools.types import ToolDescriptor, ToolEntry, ToolSpecification

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Holds the registered tools, in registration order."""

    def __init__(self) -> None:
        self._entries: dict[str, ToolEntry] = {}
        self._frozen = False

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[ToolDescriptor]) -> "ToolRegistry":
        """Build a frozen registry from a list of tool descriptors.

        Raises:
            SchemaError: If a parameter shape is unsupported
            DuplicateToolNameError: If two tools share a name
        """
        registry = cls()
        for descriptor in descriptors:
            registry.register(descriptor)
        registry.freeze()
        logger.info(f"Tool registry built with {len(registry)} tools")
        return registry

    def register(self, descriptor: ToolDescriptor) -> ToolEntry:
        """Register a tool and generate its specification.

        Args:
            descriptor: The tool declaration

        Returns:
            ToolEntry: The registered entry

        Raises:
            RegistryFrozenError: If the registry is frozen
            DuplicateToolNameError: If the name is already taken
            SchemaError: If a parameter shape is unsupported
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{descriptor.tool_name}': registry is frozen"
            )

        name = descriptor.tool_name
        if name in self._entries:
            raise DuplicateToolNameError(name)

        generator = SchemaGenerator()
        parameters = generator.generate_parameters(descriptor.parameters)
        specification = ToolSpecification(
            name=name,
            description=descriptor.description,
            parameters=parameters,
        )

        object_shapes: dict[str, ObjectShape] = {}
        for parameter in descriptor.parameters:
            collect_object_shapes(parameter.shape, object_shapes)

        entry = ToolEntry(
            specification=specification,
            descriptor=descriptor,
            object_shapes=object_shapes,
        )
        self._entries[name] = entry
        logger.debug(
            f"Registered tool {name} ({len(descriptor.parameters)} parameters, "
            f"return_raw={descriptor.return_raw})"
        )
        return entry

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def specifications(self) -> list[ToolSpecification]:
        """Return the specifications of all tools, in registration order."""
        return [entry.specification for entry in self._entries.values()]

    def lookup(self, name: str) -> ToolEntry:
        """Return the entry for a tool name.

        Raises:
            UnknownToolError: If no tool has that name
        """
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownToolError(name)
        return entry

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
