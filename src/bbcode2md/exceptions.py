#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbcode2md library.

This module defines the exception classes raised while configuring and running
the BBCode to Markdown conversion pipeline.

Exception Hierarchy
-------------------
- BBCode2MdError (base exception)

  - ValidationError (option validation)
    - ConfigError (configuration file loading)

  - ParsingError (conversion failures)
    - MalformedMarkupError (structurally invalid BBCode construct)

"""

from typing import Any

from bbcode2md.constants import MALFORMED_MARKUP_MESSAGE, UNKNOWN_DOCUMENT_ID


class BBCode2MdError(Exception):
    """Base exception class for all bbcode2md-specific errors.

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


class ValidationError(BBCode2MdError):
    """Exception raised for invalid options or configuration values.

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


class ConfigError(ValidationError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the problem
    file_path : str, optional
        Path to the offending configuration file
    original_error : Exception, optional
        The underlying read or decode error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the config error."""
        super().__init__(message, parameter_name="config", parameter_value=file_path, original_error=original_error)
        self.file_path = file_path


class ParsingError(BBCode2MdError):
    """Exception raised when converting a document fails.

    Parameters
    ----------
    message : str
        Description of the failure
    parsing_stage : str, optional
        The stage of conversion where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class MalformedMarkupError(ParsingError):
    """Exception raised when a cleaner meets a BBCode construct it cannot rewrite.

    The message names the document and the construct so the caller can locate
    the offending input, e.g. ``Text identified by 'post-42' has malformed BBCode url``.

    Parameters
    ----------
    construct : {"list", "url", "image", "snippet"}
        Kind of markup that was malformed
    doc_id : str, optional
        Identifier of the document being converted

    Attributes
    ----------
    construct : str
        Kind of markup that was malformed
    doc_id : str or None
        Identifier of the document, None when the document had none

    """

    def __init__(self, construct: str, doc_id: str | None = None, original_error: Exception | None = None):
        """Initialize the malformed markup error."""
        shown_id = UNKNOWN_DOCUMENT_ID if doc_id is None else doc_id
        message = MALFORMED_MARKUP_MESSAGE.format(doc_id=shown_id, construct=construct)
        super().__init__(message, parsing_stage=construct, original_error=original_error)
        self.construct = construct
        self.doc_id = doc_id
