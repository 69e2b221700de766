"""Data types for tool declaration, registration and execution."""

from dataclasses import dataclass, field
from typing import Any, Callable

from mochi_tools.schema.elements import ObjectSchema
from mochi_tools.schema.shapes import ObjectShape, ParameterSpec


@dataclass(frozen=True)
class ToolSpecification:
    """The schema-level description of a tool sent to the model.

    Attributes:
        name: Tool name, unique within a registry
        description: Optional human readable description
        parameters: Wrapper object schema, None when the tool takes no parameters
    """

    name: str
    description: str | None = None
    parameters: ObjectSchema | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render in the function-calling tool format."""
        function: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            function["description"] = self.description
        if self.parameters is not None:
            function["parameters"] = self.parameters.to_dict()
        return {"type": "function", "function": function}


@dataclass(frozen=True)
class ToolDescriptor:
    """Declaration of a callable exposed as a tool.

    The descriptor is callable itself, so a function decorated with ``tool``
    can still be called directly.

    Attributes:
        function: The sync or async callable to run
        parameters: Declared parameters, in call order
        name: Tool name, defaults to the function name
        description: Optional description sent to the model
        return_raw: End the chat call with this tool's result instead of
                    asking the model to summarize it
        propagate_errors: Let exceptions raised by the tool escape the chat
                          call instead of reporting them to the model
    """

    function: Callable[..., Any]
    parameters: tuple[ParameterSpec, ...] = ()
    name: str | None = None
    description: str | None = None
    return_raw: bool = False
    propagate_errors: bool = False

    @property
    def tool_name(self) -> str:
        return self.name or self.function.__name__

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.function(*args, **kwargs)


@dataclass(frozen=True)
class ToolEntry:
    """A registered tool: its specification plus execution metadata."""

    specification: ToolSpecification
    descriptor: ToolDescriptor
    object_shapes: dict[str, ObjectShape] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.specification.name

    @property
    def return_raw(self) -> bool:
        return self.descriptor.return_raw

    @property
    def propagate_errors(self) -> bool:
        return self.descriptor.propagate_errors


@dataclass(frozen=True)
class ToolExecutionRequest:
    """A tool call requested by the model.

    Attributes:
        id: Call id, echoed back with the result
        name: Requested tool name
        arguments: Arguments as JSON text
    """

    id: str
    name: str
    arguments: str = "{}"


@dataclass(frozen=True)
class ToolExecutionResult:
    """Textual outcome of one tool execution request."""

    request: ToolExecutionRequest
    result: str
