"""The ``tool`` decorator for declaring tools."""

from typing import Any, Callable

from mochi_tools.schema.shapes import ParameterSpec, Shape
from mochi_tools.tools.types import ToolDescriptor


def tool(
    *parameters: ParameterSpec | Shape,
    name: str | None = None,
    description: str | None = None,
    return_raw: bool = False,
    propagate_errors: bool = False,
) -> Callable[[Callable[..., Any]], ToolDescriptor]:
    """Declare a function as a tool.

    Parameters are listed explicitly, in call order. A bare shape is
    shorthand for a required, positionally named parameter.

    Example:
        >>> @tool(INT32, INT32, return_raw=True)
        ... def add(a: int, b: int) -> int:
        ...     return a + b
    """
    specs = tuple(
        p if isinstance(p, ParameterSpec) else ParameterSpec(shape=p)
        for p in parameters
    )

    def decorator(function: Callable[..., Any]) -> ToolDescriptor:
        return ToolDescriptor(
            function=function,
            parameters=specs,
            name=name,
            description=description,
            return_raw=return_raw,
            propagate_errors=propagate_errors,
        )

    return decorator
