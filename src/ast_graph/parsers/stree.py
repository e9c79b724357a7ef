"""Local parser collaborator: runs ``stree json`` (Ruby syntax_tree) on a temp file."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import tempfile

from ast_graph.parsers.base import ParseError
from ast_graph.types import AstValue

logger = logging.getLogger(__name__)

DEFAULT_COMMAND: tuple[str, ...] = ("stree", "json")


class StreeParser:
    """Parses Ruby source by shelling out to a JSON-emitting parser CLI.

    The code is written to a ``.rb`` temp file whose path is appended to
    ``command``; stdout must be a JSON document. ``stree`` reports
    ``location`` columns as absolute character offsets (ColumnMode.OFFSET).
    """

    def __init__(
        self,
        command: tuple[str, ...] | list[str] = DEFAULT_COMMAND,
        timeout: float | None = None,
        suffix: str = ".rb",
    ) -> None:
        self.command = tuple(command)
        self.timeout = timeout
        self.suffix = suffix

    def parse(self, code: str) -> AstValue:
        path = None
        try:
            fd, path = tempfile.mkstemp(prefix="code-", suffix=self.suffix)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(code)
            result = subprocess.run(
                [*self.command, path],
                capture_output=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.error("%s timed out after %ss", " ".join(self.command), self.timeout)
            raise ParseError(f"{self.command[0]} timed out") from e
        except UnicodeError as e:
            logger.error("%s produced output that is not UTF-8", self.command[0])
            raise ParseError(f"{self.command[0]} produced undecodable output") from e
        except OSError as e:
            logger.error("cannot run %s: %s", " ".join(self.command), e)
            raise ParseError(f"failed to execute {self.command[0]}: {e}") from e
        finally:
            if path is not None:
                try:
                    os.remove(path)
                except OSError:
                    logger.debug("temp file %s already gone", path)

        if result.returncode != 0:
            logger.error("%s exited with %d: %s", " ".join(self.command), result.returncode, result.stderr.strip())
            raise ParseError(f"{self.command[0]} exited with status {result.returncode}")

        try:
            return json.loads(result.stdout)
        except ValueError as e:
            logger.error("%s produced malformed JSON", self.command[0])
            raise ParseError(f"{self.command[0]} produced malformed JSON") from e
