#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the autotab library.

This module defines specialized exception classes for the error conditions
that can occur while detecting and reading tabular files. All errors are
raised synchronously and never retried.

Exception Hierarchy
-------------------
- AutotabError (base exception)

  - ValidationError (option validation, API misuse)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (open, stat, seek and read failures)

  - FormatError (unsupported file extension)

  - FormatDetectionError (empty file, undeterminable encoding or line ending)

  - StructuralError (column count mismatch, out-of-bounds row or line)

  - ArchiveError (zip open/extract failures)
    - ArchiveSecurityError (zip bombs, path traversal)

  - XMLError (malformed or unexpected worksheet structure)

"""

from typing import Any


class AutotabError(Exception):
    """Base exception class for all autotab-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(AutotabError):
    """Exception raised for invalid parameters, options or call order.

    This covers invalid option values, reading rows before detection and
    attempts to re-establish an already established descriptor.

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


class FileError(AutotabError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileAccessError(FileError):
    """Exception raised when a file cannot be opened, stat'ed, sought or read.

    Parameters
    ----------
    file_path : str
        Path to the file that cannot be accessed
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileNotFoundError(FileAccessError):
    """Exception raised when a file does not exist."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(file_path, message=message, original_error=original_error)


class FormatError(AutotabError):
    """Exception raised for a file whose extension no reader supports.

    Parameters
    ----------
    message : str, optional
        Custom error message
    format_type : str, optional
        The unsupported extension
    supported_formats : list[str], optional
        Extensions that are supported

    """

    def __init__(
        self,
        message: str | None = None,
        format_type: str | None = None,
        supported_formats: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the format error."""
        if message is None:
            if format_type:
                message = f"Unsupported format: '{format_type}'"
                if supported_formats:
                    message += f". Supported formats: {', '.join(supported_formats)}"
            else:
                message = "File format is not supported"

        super().__init__(message, original_error=original_error)
        self.format_type = format_type
        self.supported_formats = supported_formats


class FormatDetectionError(AutotabError):
    """Exception raised when the byte-level format of a file cannot be determined.

    Raised for empty files and when neither an encoding nor a line ending
    can be established from the sample.
    """


class StructuralError(AutotabError):
    """Exception raised when a row does not fit the established structure.

    Parameters
    ----------
    message : str
        Description of the structural problem
    expected : int, optional
        Expected count (columns, or the exclusive upper bound of an index)
    actual : int, optional
        Count or index actually encountered

    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the structural error."""
        super().__init__(message, original_error=original_error)
        self.expected = expected
        self.actual = actual


class ArchiveError(AutotabError):
    """Exception raised when a spreadsheet package cannot be opened or read.

    Parameters
    ----------
    message : str
        Description of the failure
    reason : str, optional
        Human-readable reason mapped from the failure kind
    file_path : str, optional
        Path to the archive

    """

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        file_path: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the archive error."""
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, original_error=original_error)
        self.reason = reason
        self.file_path = file_path


class ArchiveSecurityError(ArchiveError):
    """Exception raised when an archive fails security validation.

    This includes zip bombs, path traversal attempts and excessive entry
    counts.
    """


class XMLError(AutotabError):
    """Exception raised for malformed or unexpected worksheet XML.

    Parameters
    ----------
    message : str
        Description of the problem
    part_name : str, optional
        Archive entry the XML was read from

    """

    def __init__(self, message: str, part_name: str | None = None, original_error: Exception | None = None):
        """Initialize the XML error."""
        super().__init__(message, original_error=original_error)
        self.part_name = part_name
