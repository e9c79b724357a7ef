"""Client for a remote parse service (``POST /parse``)."""

from __future__ import annotations

import logging

import httpx

from ast_graph.config import DEFAULT_PARSE_URL
from ast_graph.parsers.base import ParseError
from ast_graph.types import AstValue

logger = logging.getLogger(__name__)


class HttpParser:
    """Sends ``{"code": ...}`` to a parse service and returns its JSON body.

    Any transport error, non-200 status or undecodable body is raised as
    ParseError. No retries.
    """

    def __init__(
        self,
        url: str = DEFAULT_PARSE_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def parse(self, code: str) -> AstValue:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json={"code": code})
        except httpx.TimeoutException as e:
            logger.error("parse request to %s timed out", self.url)
            raise ParseError(f"parser at {self.url} timed out") from e
        except httpx.HTTPError as e:
            logger.error("parse request to %s failed: %s", self.url, e)
            raise ParseError(f"parser at {self.url} unreachable: {e}") from e

        if response.status_code != 200:
            logger.error("parser at %s answered HTTP %d", self.url, response.status_code)
            raise ParseError(f"HTTP error! status: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            logger.error("parser at %s returned malformed JSON", self.url)
            raise ParseError("parser returned malformed JSON") from e
