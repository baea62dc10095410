# backend/services/version_tag.py
import re
from dataclasses import dataclass

from services.exceptions import VersionInvalidError

VERSION_PATTERN = re.compile(r'"(\d{1,3})"')


@dataclass(frozen=True)
class VersionTag:
    """Concurrency token sent by clients as a quoted integer, e.g. "3"."""

    value: int

    @classmethod
    def parse(cls, text) -> "VersionTag":
        match = VERSION_PATTERN.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise VersionInvalidError(text)
        return cls(int(match.group(1)))

    @classmethod
    def of(cls, version: int) -> "VersionTag":
        return cls(version)

    def __str__(self):
        return f'"{self.value}"'
