"""
TODO TOOL - Errors
==================
Every failure is terminal for the current invocation: nothing is persisted
and the CLI exits non-zero.
"""


class TodoToolError(Exception):
    """Base class for all tool failures"""


class NotFound(TodoToolError):
    """Task reference index is out of range"""


class PrefixMismatch(TodoToolError):
    """Task reference is stale: the text no longer starts with the prefix"""


class InvalidActivation(TodoToolError):
    """Attempt to make a completed task the active one"""


class UnknownCommand(TodoToolError):
    """Dispatch to a command name that does not exist"""


class MalformedInput(TodoToolError):
    """Parameter payload is not valid JSON or does not fit the command"""


class StorageFailure(TodoToolError):
    """Task list document exists but cannot be read, parsed or written"""
