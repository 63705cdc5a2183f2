r"""Client for the Generative Language ``generateContent`` endpoint.

This module wraps the one request readme_forge makes: POST a single-turn
prompt and read back the first candidate's text. It maps non-2xx statuses to
:class:`~readme_forge.errors.HttpStatusError`, missing payload fields to
:class:`~readme_forge.errors.InvalidResponseShapeError`, and transport
failures to :class:`~readme_forge.errors.UnknownError`.

Anything exposing ``generate(prompt) -> str`` satisfies
:class:`GenerationBackend`, so tests can swap in a deterministic stub.

Example
-------
>>> from readme_forge.client import GenerativeLanguageClient
>>> client = GenerativeLanguageClient(api_key="example-key")  # doctest: +SKIP
>>> client.generate("Write a README for a CLI")  # doctest: +SKIP
'# My CLI\n...'
"""

from __future__ import annotations

import json
import logging
import typing as typ
from http import HTTPStatus

import requests

from ._constants import DEFAULT_API_BASE, DEFAULT_MODEL
from .errors import (
    HttpStatusError,
    InvalidResponseShapeError,
    MissingCredentialError,
    UnknownError,
)

if typ.TYPE_CHECKING:
    from .config import ClientSettings

logger = logging.getLogger(__name__)

_API_KEY_HEADER = "x-goog-api-key"


class GenerationBackend(typ.Protocol):
    """Narrow request/response interface in front of the model endpoint."""

    def generate(self, prompt: str) -> str:
        """Return the raw model text for ``prompt``."""
        ...


class GenerativeLanguageClient:
    """Thin wrapper around ``models/{model}:generateContent``.

    The client sends one request per call. It does not retry and does not
    impose a timeout unless one is passed in.
    """

    default_api_base = DEFAULT_API_BASE

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        api_base: str = DEFAULT_API_BASE,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialise the client with credentials and transport.

        Parameters
        ----------
        api_key : str | None
            Static API key sent in the ``x-goog-api-key`` header. ``None`` or
            blank makes every :meth:`generate` call raise
            :class:`MissingCredentialError` before touching the network.
        model : str, optional
            Model name; defaults to ``DEFAULT_MODEL``.
        api_base : str, optional
            Base URL of the API; override for proxies or test servers.
        session : requests.Session, optional
            Preconfigured session to reuse connections. Defaults to a new
            session per client.
        timeout : float | None, optional
            Per-request timeout in seconds; ``None`` (default) waits for the
            endpoint.
        """
        self._api_key = api_key.strip() if api_key else None
        self.model = model
        self._api_base = api_base.rstrip("/") or DEFAULT_API_BASE
        self._session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, *, session: requests.Session | None = None
    ) -> GenerativeLanguageClient:
        """Build a client from resolved :class:`ClientSettings`."""
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            api_base=settings.api_base,
            session=session,
        )

    @property
    def endpoint(self) -> str:
        """Return the ``generateContent`` URL for the configured model."""
        return f"{self._api_base}/v1beta/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the first candidate's text.

        Raises
        ------
        MissingCredentialError
            If no API key is configured.
        HttpStatusError
            If the endpoint answers with a status of 400 or above.
        InvalidResponseShapeError
            If the body is not JSON or lacks
            ``candidates[0].content.parts[0].text``.
        UnknownError
            If the request fails in transport.
        """
        if not self._api_key:
            msg = (
                "API key is not configured. Please set GEMINI_API_KEY in your "
                "environment."
            )
            raise MissingCredentialError(msg)

        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        headers = {
            "Content-Type": "application/json",
            _API_KEY_HEADER: self._api_key,
        }
        logger.debug("POST %s (%d prompt chars)", self.endpoint, len(prompt))
        try:
            response = self._session.post(
                self.endpoint, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach the generation endpoint: {exc}"
            raise UnknownError(msg) from exc

        if response.status_code >= HTTPStatus.BAD_REQUEST:
            message = _extract_error_message(response)
            logger.warning(
                "Generation request failed with status %s: %s",
                response.status_code,
                message,
            )
            raise HttpStatusError(response.status_code, message)

        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            msg = "Generation response was not valid JSON."
            raise InvalidResponseShapeError(msg) from exc
        return extract_text(body)


def extract_text(body: object) -> str:
    """Return ``candidates[0].content.parts[0].text`` from a response body."""
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as exc:
        msg = "Response is missing candidates[0].content.parts[0].text."
        raise InvalidResponseShapeError(msg) from exc
    if not isinstance(text, str) or not text:
        msg = "Response text is empty or not a string."
        raise InvalidResponseShapeError(msg)
    return text


def _extract_error_message(response: requests.Response) -> str | None:
    """Return ``error.message`` from an error body, or None when absent."""
    try:
        payload = response.json()
    except (json.JSONDecodeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) and message else None


__all__ = [
    "GenerationBackend",
    "GenerativeLanguageClient",
    "extract_text",
]
