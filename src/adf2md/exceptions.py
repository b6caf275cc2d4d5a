#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by adf2md.

Rendering and coercion accept any value and never raise. Errors come
from the edges of the library instead:

- Adf2MdError
  - ValidationError: a bad option or parameter value
    - InvalidOptionsError: an options object of the wrong class
  - ParsingError: CLI input that is not decodable JSON
  - DependencyError: an optional package is not installed

The CLI maps each branch to its own exit code, see
``adf2md.cli.builder.get_exit_code_for_exception``.

"""

from typing import Any


class Adf2MdError(Exception):
    """Base class of every adf2md error.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        Lower-level exception this error was raised from

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Adf2MdError):
    """A parameter or option was given a value adf2md cannot use.

    ``parameter_name`` and ``parameter_value`` identify the offending
    input when known.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A renderer received an options object meant for another renderer.

    Parameters
    ----------
    renderer_name : str
        Renderer that rejected the options, e.g. ``"MarkdownRenderer"``
    expected_type : type
        Options class the renderer accepts
    received_type : type
        Class of the object that was passed

    Examples
    --------
        >>> str(InvalidOptionsError("MarkdownRenderer", int, str))
        "MarkdownRenderer expected options of type 'int' but received 'str'."

    """

    def __init__(self, renderer_name: str, expected_type: type, received_type: type):
        super().__init__(
            f"{renderer_name} expected options of type '{expected_type.__name__}' "
            f"but received '{received_type.__name__}'.",
            parameter_name="options",
            parameter_value=received_type,
        )
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(Adf2MdError):
    """Input handed to the CLI could not be decoded.

    ``parsing_stage`` names the step that failed (``"json_parsing"``).
    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class DependencyError(Adf2MdError):
    """An optional feature was used without its packages installed.

    Parameters
    ----------
    feature : str
        Feature that was requested, e.g. ``"rich output"``
    missing_packages : list[str]
        Distribution names that could not be imported
    install_command : str, optional
        Command that installs them, appended to the message
    original_import_error : ImportError, optional
        First import failure

    """

    def __init__(
        self,
        feature: str,
        missing_packages: list[str],
        install_command: str = "",
        original_import_error: ImportError | None = None,
    ):
        message = f"'{feature}' requires the following packages: {', '.join(missing_packages)}."
        if install_command:
            message = f"{message} Install with: {install_command}"
        super().__init__(message, original_error=original_import_error)
        self.feature = feature
        self.missing_packages = missing_packages
        self.install_command = install_command
