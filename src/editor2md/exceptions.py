#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the editor2md library.

Exception Hierarchy
-------------------
- Editor2MdError (base exception)

  - ValidationError (option validation)

  - InputError (unsupported or unreadable input)
    - MalformedInputError (markup the parser rejected, undecodable bytes)

  - RecursionLimitExceededError (nesting depth guard)

  - ConversionError (unexpected failures during serialization)

"""

from typing import Any


class Editor2MdError(Exception):
    """Base exception class for all editor2md-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Editor2MdError):
    """Exception raised for invalid option values.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InputError(Editor2MdError):
    """Exception raised when the conversion input cannot be used.

    Parameters
    ----------
    message : str
        Description of the input problem
    input_type : str, optional
        Name of the type that was received
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, input_type: str | None = None, original_error: Exception | None = None):
        """Initialize the input error."""
        super().__init__(message, original_error=original_error)
        self.input_type = input_type


class MalformedInputError(InputError):
    """Exception raised when the HTML cannot be turned into a parse tree."""


class RecursionLimitExceededError(Editor2MdError):
    """Exception raised when the source tree nests deeper than allowed.

    Parameters
    ----------
    depth : int
        Nesting depth at which the guard tripped
    limit : int
        Configured maximum depth
    tag_name : str, optional
        Name of the element that exceeded the limit

    """

    def __init__(self, depth: int, limit: int, tag_name: str | None = None):
        """Initialize the recursion error."""
        where = f" at <{tag_name}>" if tag_name else ""
        super().__init__(f"Maximum nesting depth of {limit} exceeded{where} (depth {depth})")
        self.depth = depth
        self.limit = limit
        self.tag_name = tag_name


class ConversionError(Editor2MdError):
    """Exception raised when serialization fails unexpectedly.

    Parameters
    ----------
    message : str
        Description of the failure
    conversion_stage : str, optional
        Stage of the conversion that failed (e.g. "parsing", "serialization")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, conversion_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the conversion error."""
        super().__init__(message, original_error=original_error)
        self.conversion_stage = conversion_stage
