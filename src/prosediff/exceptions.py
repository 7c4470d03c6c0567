#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the prosediff library.

This module defines specialized exception classes for the error conditions
that can occur while highlighting a diff stream. Input that is not a diff
at all is *not* an error: it is passed through unchanged.

Exception Hierarchy
-------------------
- ProsediffError (base exception)

  - ValidationError (parameter/option validation)

  - InputError (input stream cannot be read or decoded)

  - OutputWriteError (output sink cannot be written)

  - CommandError (diff command or pager cannot be started)

"""

from typing import Any


class ProsediffError(Exception):
    """Base exception class for all prosediff-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(ProsediffError):
    """Exception raised for invalid input parameters or options.

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


class InputError(ProsediffError):
    """Exception raised when the diff input stream cannot be read.

    Decoding failures are fatal for the whole run. Hunks that were already
    written to the output remain valid.

    Parameters
    ----------
    message : str
        Description of the failure
    line_number : int, optional
        Number of the input line (1-based) being read when the error occurred
    original_error : Exception, optional
        The underlying ``UnicodeDecodeError`` or ``OSError``

    """

    def __init__(self, message: str, line_number: int | None = None, original_error: Exception | None = None):
        """Initialize the input error."""
        super().__init__(message, original_error=original_error)
        self.line_number = line_number


class OutputWriteError(ProsediffError):
    """Exception raised when writing highlighted output fails."""

    def __init__(self, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = "Failed to write output"
        super().__init__(message, original_error=original_error)


class CommandError(ProsediffError):
    """Exception raised when an external command cannot be run.

    Parameters
    ----------
    command : str
        The command line that failed to start
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    command : str
        The command line that failed to start

    """

    def __init__(self, command: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the command error."""
        if message is None:
            reason = f": {original_error.strerror or original_error}" if isinstance(original_error, OSError) else ""
            message = f"Cannot run command '{command}'{reason}"
        super().__init__(message, original_error=original_error)
        self.command = command
