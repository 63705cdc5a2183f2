"""Error kinds raised while building prompts and talking to the endpoint.

Every failure the session can surface to the user derives from
:class:`ReadmeForgeError`. :func:`describe_error` turns any raised value into
the short message shown inline next to the action that failed.

Example
-------
>>> from readme_forge.errors import HttpStatusError, describe_error
>>> describe_error(HttpStatusError(429, "Quota exceeded"))
'Rate limit reached. Please wait a moment before trying again.'
"""

from __future__ import annotations

from http import HTTPStatus


class ReadmeForgeError(Exception):
    """Base class for errors raised by readme_forge."""


class EmptyInputError(ReadmeForgeError, ValueError):
    """Raised when the project plan is blank after trimming."""


class MissingCredentialError(ReadmeForgeError):
    """Raised when no API key is configured."""


class HttpStatusError(ReadmeForgeError):
    """Raised when the generation endpoint answers with a non-2xx status.

    Attributes
    ----------
    code : int
        HTTP status code returned by the endpoint.
    message : str | None
        ``error.message`` from the response body when it could be parsed.
    """

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = code
        self.message = message
        super().__init__(f"Generation request failed with status {code}: {message}")


class InvalidResponseShapeError(ReadmeForgeError):
    """Raised when the response lacks ``candidates[0].content.parts[0].text``."""


class UnknownError(ReadmeForgeError):
    """Raised for transport failures and anything else unexpected."""


class ConfigError(ReadmeForgeError, ValueError):
    """Raised when options or settings are invalid or incomplete."""


class UnknownSectionError(ReadmeForgeError, LookupError):
    """Raised when an edit targets a section id missing from the document."""


class ClipboardError(ReadmeForgeError):
    """Raised when the document cannot be copied to the system clipboard."""


_STATUS_MESSAGES: dict[int, str] = {
    HTTPStatus.SERVICE_UNAVAILABLE: (
        "The generation servers are currently overloaded. "
        "Please try again in a few moments."
    ),
    HTTPStatus.TOO_MANY_REQUESTS: (
        "Rate limit reached. Please wait a moment before trying again."
    ),
    HTTPStatus.BAD_REQUEST: (
        "Invalid request. Please check your project plan and try again."
    ),
    HTTPStatus.UNAUTHORIZED: (
        "API key issue. Please check your GEMINI_API_KEY configuration."
    ),
    HTTPStatus.FORBIDDEN: (
        "API key issue. Please check your GEMINI_API_KEY configuration."
    ),
}

GENERIC_ERROR_MESSAGE = "An unknown error occurred."


def describe_error(exc: BaseException) -> str:
    """Return the user-facing message for ``exc``.

    HTTP failures map through a fixed status table; other statuses fall back
    to the endpoint-supplied message, then to a generic message. Other
    readme_forge errors keep their own message. Anything else, such as a
    ``KeyError`` escaping a custom backend, gets the generic message.
    """
    match exc:
        case HttpStatusError(code=code, message=message):
            if code in _STATUS_MESSAGES:
                return _STATUS_MESSAGES[code]
            if message:
                return message
            return f"API request failed with status: {code}"
        case InvalidResponseShapeError():
            return "Invalid response structure from the model. Please try again."
        case ReadmeForgeError():
            return str(exc) or GENERIC_ERROR_MESSAGE
        case _:
            return GENERIC_ERROR_MESSAGE


__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "ClipboardError",
    "ConfigError",
    "EmptyInputError",
    "HttpStatusError",
    "InvalidResponseShapeError",
    "MissingCredentialError",
    "ReadmeForgeError",
    "UnknownError",
    "UnknownSectionError",
    "describe_error",
]
