"""Loading tool descriptors from a Python module."""

import importlib
import logging

from mochi_tools.tools.types import ToolDescriptor

logger = logging.getLogger(__name__)


def load_tools(module_path: str) -> list[ToolDescriptor]:
    """Import a module and collect the tools it declares.

    A module can list its tools explicitly in a ``TOOLS`` sequence. Without
    one, every module attribute that is a ToolDescriptor is collected, in
    definition order.

    Args:
        module_path: Dotted import path, e.g. "my_project.tools"

    Returns:
        list[ToolDescriptor]: The declared tools

    Raises:
        ImportError: If the module cannot be imported
        TypeError: If TOOLS contains something that is not a ToolDescriptor
    """
    module = importlib.import_module(module_path)

    declared = getattr(module, "TOOLS", None)
    if declared is not None:
        descriptors = list(declared)
        for item in descriptors:
            if not isinstance(item, ToolDescriptor):
                raise TypeError(
                    f"{module_path}.TOOLS contains {item!r}, expected ToolDescriptor"
                )
    else:
        descriptors = [
            value for value in vars(module).values() if isinstance(value, ToolDescriptor)
        ]

    logger.info(f"Loaded {len(descriptors)} tools from {module_path}")
    return descriptors
