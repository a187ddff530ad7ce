"""Exceptions raised while reading IP-XACT XML documents."""

from pathlib import Path
from typing import Optional, Union


class ParseError(Exception):
    """
    An IP-XACT document could not be turned into a model.

    ``str(error)`` reads ``File: <path> | Line: <n> | <message>``; the file
    and line parts are left out when unknown.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[Union[str, Path]] = None,
        line: Optional[int] = None,
    ):
        self.message = message
        self.file_path = file_path
        self.line = line

        location = []
        if file_path:
            location.append(f"File: {file_path}")
        if line is not None:
            location.append(f"Line: {line}")
        super().__init__(" | ".join(location + [message]))

    def within(self, what: str, index: int) -> "ParseError":
        """Same error, attributed to element ``index`` of a ``what`` list."""
        return ParseError(
            f"Error parsing {what}[{index}]: {self.message}", self.file_path, self.line
        )
