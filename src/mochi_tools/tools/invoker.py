"""Tool invocation: argument binding, execution and result formatting.

The invoker is the boundary between model-supplied JSON and Python
callables. Anything that goes wrong for a single call (unparseable
arguments, values that do not fit the declared shape, exceptions raised by
the tool) becomes the textual result the model sees, so the conversation can
carry on. Only tools declared with ``propagate_errors`` let their exceptions
escape.
"""

import asyncio
import dataclasses
import inspect
import json
import logging
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from mochi_tools.exceptions import (
    ArgumentCoercionError,
    MissingFieldError,
    ToolInvocationError,
    UnknownToolError,
)
from mochi_tools.schema.shapes import (
    INTEGER_RANGES,
    EnumShape,
    ListShape,
    MapShape,
    ObjectShape,
    PrimitiveKind,
    PrimitiveShape,
    RefShape,
    SetShape,
    Shape,
)
from mochi_tools.tools.registry import ToolRegistry
from mochi_tools.tools.types import ToolEntry, ToolExecutionRequest, ToolExecutionResult

logger = logging.getLogger(__name__)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def coerce_value(
    value: Any,
    shape: Shape,
    path: str,
    object_shapes: Mapping[str, ObjectShape],
) -> Any:
    """Coerce a decoded JSON value to the Python value a shape describes.

    Args:
        value: Decoded JSON value
        shape: Declared shape
        path: Dotted location of the value, used in error messages
        object_shapes: Object shapes by name, for resolving RefShape

    Raises:
        ArgumentCoercionError: If the value does not fit the shape
        MissingFieldError: If an object field is absent
    """
    if isinstance(shape, RefShape):
        shape = object_shapes[shape.name]

    if isinstance(shape, PrimitiveShape):
        return _coerce_primitive(value, shape.kind, path)

    if isinstance(shape, EnumShape):
        if not isinstance(value, str) or value not in shape.values:
            raise ArgumentCoercionError(
                path,
                f"expected one of {list(shape.values)}, got {value!r}",
            )
        if shape.enum_class is not None:
            return shape.enum_class[value]
        return value

    if isinstance(shape, ObjectShape):
        return _coerce_object(value, shape, path, object_shapes)

    if isinstance(shape, (ListShape, SetShape)):
        if not isinstance(value, list):
            raise ArgumentCoercionError(path, f"expected an array, got {_json_type(value)}")
        items = [
            coerce_value(item, shape.items, f"{path}[{index}]", object_shapes)
            for index, item in enumerate(value)
        ]
        if isinstance(shape, ListShape):
            return items
        # Duplicates collapse here, at binding time
        try:
            return frozenset(items)
        except TypeError as e:
            raise ArgumentCoercionError(path, f"set items must be hashable: {e}") from e

    if isinstance(shape, MapShape):
        if not isinstance(value, dict):
            raise ArgumentCoercionError(path, f"expected an object, got {_json_type(value)}")
        if shape.values is None:
            return dict(value)
        # Null values are rejected like any other mismatch of the value shape
        return {
            key: coerce_value(item, shape.values, f"{path}.{key}", object_shapes)
            for key, item in value.items()
        }

    raise ArgumentCoercionError(path, f"unsupported shape {shape!r}")


def _coerce_primitive(value: Any, kind: PrimitiveKind, path: str) -> Any:
    if kind.is_integral:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ArgumentCoercionError(path, f"expected an integer, got {_json_type(value)}")
        if isinstance(value, float):
            if not value.is_integer():
                raise ArgumentCoercionError(path, f"expected an integer, got {value!r}")
            value = int(value)
        low, high = INTEGER_RANGES[kind]
        if not low <= value <= high:
            raise ArgumentCoercionError(
                path, f"{value} is out of range for {kind.value}"
            )
        return value

    if kind.is_floating:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ArgumentCoercionError(path, f"expected a number, got {_json_type(value)}")
        return float(value)

    if kind is PrimitiveKind.BOOLEAN:
        if not isinstance(value, bool):
            raise ArgumentCoercionError(path, f"expected a boolean, got {_json_type(value)}")
        return value

    if not isinstance(value, str):
        raise ArgumentCoercionError(path, f"expected a string, got {_json_type(value)}")
    return value


def _coerce_object(
    value: Any,
    shape: ObjectShape,
    path: str,
    object_shapes: Mapping[str, ObjectShape],
) -> Any:
    if not isinstance(value, dict):
        raise ArgumentCoercionError(path, f"expected an object, got {_json_type(value)}")

    bound: dict[str, Any] = {}
    for field_spec in shape.fields:
        field_path = f"{path}.{field_spec.name}"
        if field_spec.name not in value:
            raise MissingFieldError(field_path)
        item = value[field_spec.name]
        if item is None:
            if not field_spec.nullable:
                raise ArgumentCoercionError(field_path, "must not be null")
            bound[field_spec.name] = None
            continue
        bound[field_spec.name] = coerce_value(
            item, field_spec.shape, field_path, object_shapes
        )

    if shape.factory is None:
        return bound
    try:
        return shape.factory(**bound)
    except (TypeError, ValueError) as e:
        raise ArgumentCoercionError(path, str(e)) from e


def bind_arguments(entry: ToolEntry, arguments: str) -> list[Any]:
    """Turn a JSON arguments payload into positional call arguments.

    Blank payloads count as an empty object. Unknown properties are ignored;
    absent optional parameters get their declared default.

    Raises:
        ArgumentCoercionError: If the payload or a value is invalid
        MissingFieldError: If a required parameter or field is absent
    """
    if arguments is None or not arguments.strip():
        payload: Any = {}
    else:
        try:
            payload = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise ArgumentCoercionError("arguments", f"invalid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ArgumentCoercionError(
            "arguments", f"expected an object, got {_json_type(payload)}"
        )

    bound: list[Any] = []
    for index, parameter in enumerate(entry.descriptor.parameters):
        name = parameter.property_name(index)
        value = payload.get(name)
        if value is None:
            if parameter.optional:
                bound.append(parameter.default)
                continue
            if name not in payload:
                raise MissingFieldError(name)
            raise ArgumentCoercionError(name, "must not be null")
        bound.append(coerce_value(value, parameter.shape, name, entry.object_shapes))
    return bound


def _to_jsonable(value: Any) -> Any:
    # Before the scalar checks: str and int mixin enums are instances of both
    if isinstance(value, Enum):
        return value.name
    if value is None or isinstance(value, (bool, str, int)):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return _to_jsonable(value.model_dump())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(key): _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_jsonable(item) for item in value]
    return str(value)


def format_result(value: Any) -> str:
    """Render a tool's return value as text for the model.

    ``None`` becomes ``"Success"``, strings are verbatim, booleans are
    ``true``/``false``, integral numbers are plain decimals and composite
    values are compact JSON of their fields.
    """
    if value is None:
        return "Success"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    rendered = _to_jsonable(value)
    if isinstance(rendered, str):
        return rendered
    return json.dumps(rendered, ensure_ascii=False, separators=(",", ":"))


def _fault_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


class ToolInvoker:
    """Executes tool requests against registry entries."""

    async def execute(
        self, registry: ToolRegistry, request: ToolExecutionRequest
    ) -> tuple[ToolExecutionResult, ToolEntry | None]:
        """Look up and invoke the requested tool.

        An unknown tool name yields a result describing the lookup failure
        and no entry.
        """
        try:
            entry = registry.lookup(request.name)
        except UnknownToolError as e:
            logger.warning(f"Model requested unknown tool: {request.name}")
            return ToolExecutionResult(request=request, result=str(e)), None

        return await self.invoke(entry, request), entry

    async def invoke(
        self, entry: ToolEntry, request: ToolExecutionRequest
    ) -> ToolExecutionResult:
        """Bind arguments, call the tool and stringify its outcome.

        Args:
            entry: The registered tool
            request: The model's execution request

        Returns:
            ToolExecutionResult: The result, or the fault message on failure
        """
        try:
            arguments = bind_arguments(entry, request.arguments)
        except ToolInvocationError as e:
            logger.warning(f"Could not bind arguments for tool {entry.name}: {e}")
            return ToolExecutionResult(request=request, result=str(e))

        logger.debug(f"Invoking tool {entry.name} (call {request.id})")
        try:
            value = await self._call(entry.descriptor.function, arguments)
        except Exception as e:
            if entry.propagate_errors:
                raise
            logger.warning(f"Tool {entry.name} raised {type(e).__name__}: {e}")
            return ToolExecutionResult(request=request, result=_fault_message(e))

        return ToolExecutionResult(request=request, result=format_result(value))

    async def _call(self, function: Callable[..., Any], arguments: list[Any]) -> Any:
        if inspect.iscoroutinefunction(function):
            return await function(*arguments)
        # Sync tools run in a worker thread so a round can run them concurrently
        value = await asyncio.to_thread(function, *arguments)
        if inspect.isawaitable(value):
            value = await value
        return value
