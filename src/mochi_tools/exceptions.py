"""Exception hierarchy for mochi-tools.

Configuration-time errors (schema generation, registry build) are fatal and
surface to whoever builds the assistant. Per-invocation errors are caught by
the ToolInvoker and turned into the textual result the model sees, so a
single failing tool never aborts a round.
"""


class MochiToolsError(Exception):
    """Base exception for all mochi-tools errors."""

    pass


class SchemaError(MochiToolsError):
    """Raised when a parameter shape cannot be turned into a JSON schema."""

    pass


class DuplicateToolNameError(MochiToolsError):
    """Raised when two tools in one registry share a name."""

    def __init__(self, name: str):
        super().__init__(f"Tool '{name}' is already registered")
        self.name = name


class RegistryFrozenError(MochiToolsError):
    """Raised when registering into a registry that has been frozen."""

    pass


class ToolInvocationError(MochiToolsError):
    """Base for faults raised while binding or running a single tool call."""

    pass


class ArgumentCoercionError(ToolInvocationError):
    """Raised when a JSON value cannot be coerced to the declared shape."""

    def __init__(self, path: str, message: str):
        super().__init__(f"Invalid value for '{path}': {message}")
        self.path = path


class MissingFieldError(ToolInvocationError):
    """Raised when a required parameter or object field is absent."""

    def __init__(self, path: str):
        super().__init__(f"Missing required field '{path}'")
        self.path = path


class UnknownToolError(MochiToolsError):
    """Raised when the model requests a tool that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Tool '{name}' does not exist")
        self.name = name


class MaxRoundsExceededError(MochiToolsError):
    """Raised when a chat call exceeds the configured number of model rounds."""

    def __init__(self, max_rounds: int):
        super().__init__(
            f"Conversation exceeded the maximum of {max_rounds} model rounds"
        )
        self.max_rounds = max_rounds


class ModelTransportError(MochiToolsError):
    """Raised when the model collaborator fails to produce a response."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}
