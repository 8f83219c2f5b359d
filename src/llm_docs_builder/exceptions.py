#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the llm-docs-builder library.

This module defines the exception classes raised while loading configuration,
generating llms.txt indexes, transforming documents and fetching remote pages.
The HTML to Markdown engine itself never raises for malformed markup; it
degrades to the original HTML instead.

Exception Hierarchy
-------------------
- LlmDocsBuilderError (base exception)

  - ValidationError (parameter/option validation)

  - ConfigurationError (config file discovery and parsing)

  - FileError (file access and I/O)
    - FileNotFoundError (file or directory doesn't exist)

  - GenerationError (llms.txt generation and bulk transformation)

  - NetworkError (remote fetch failures)

"""

from typing import Any


class LlmDocsBuilderError(Exception):
    """Base exception class for all llm-docs-builder errors.

    Catching this will catch every library-specific error.

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


class ValidationError(LlmDocsBuilderError):
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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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


class ConfigurationError(LlmDocsBuilderError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path to the offending configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class FileError(LlmDocsBuilderError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when a file or directory cannot be found.

    Parameters
    ----------
    file_path : str
        Path that was not found
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class GenerationError(LlmDocsBuilderError):
    """Exception raised when llms.txt generation or bulk transformation fails."""


class NetworkError(LlmDocsBuilderError):
    """Exception raised when a remote page cannot be fetched.

    Parameters
    ----------
    message : str
        Description of the network failure
    url : str, optional
        The URL being fetched
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, url: str | None = None, original_error: Exception | None = None):
        """Initialize the network error."""
        super().__init__(message, original_error=original_error)
        self.url = url


__all__ = [
    "LlmDocsBuilderError",
    "ValidationError",
    "ConfigurationError",
    "FileError",
    "FileNotFoundError",
    "GenerationError",
    "NetworkError",
]
