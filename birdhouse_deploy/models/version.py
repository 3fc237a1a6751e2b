"""Application version model"""

from dataclasses import dataclass
from typing import Tuple

from packaging.version import Version

from ..api.exceptions import VersionFormatError
from ..constants import VERSION_PATTERN, VERSION_TARGET_PATTERN, UpdateMode

VERSION_PARTS = 4


@dataclass(frozen=True)
class AppVersion:
    """A 1-4 component numeric version plus the client update mode

    The string form is what the browser runtime reads, e.g. ``1.2.3.5-f``
    for a forced update.
    """

    parts: Tuple[int, ...]
    mode: UpdateMode = UpdateMode.REGULAR

    @classmethod
    def parse(cls, value: str) -> 'AppVersion':
        """Parse a stored version string, marker included

        Raises:
            VersionFormatError: If the string is not a valid version
        """
        match = VERSION_PATTERN.fullmatch(str(value).strip())
        if not match:
            raise VersionFormatError(
                value,
                f"Could not parse version '{value}' stored in the app config"
            )

        parts = tuple(int(p) for p in match.group('numbers').split('.'))
        mode = UpdateMode(match.group('mode') or "")
        return cls(parts=parts, mode=mode)

    @classmethod
    def parse_target(cls, value: str) -> 'AppVersion':
        """Parse a user supplied target version (no marker allowed)

        Raises:
            VersionFormatError: If the value does not match x, x.x, x.x.x or x.x.x.x
        """
        if not VERSION_TARGET_PATTERN.fullmatch(value or ""):
            raise VersionFormatError(value)

        return cls(parts=tuple(int(p) for p in value.split('.'))).padded()

    @property
    def numbers(self) -> str:
        """Numeric part without the marker"""
        return ".".join(str(p) for p in self.parts)

    def padded(self) -> 'AppVersion':
        """Zero-pad to four components"""
        parts = self.parts + (0,) * (VERSION_PARTS - len(self.parts))
        return AppVersion(parts=parts, mode=self.mode)

    def bump(self) -> 'AppVersion':
        """Increment the fourth component, padding missing ones"""
        parts = list(self.padded().parts)
        parts[VERSION_PARTS - 1] += 1
        return AppVersion(parts=tuple(parts), mode=self.mode)

    def with_mode(self, mode: UpdateMode) -> 'AppVersion':
        return AppVersion(parts=self.parts, mode=mode)

    def to_packaging(self) -> Version:
        """Comparable representation (markers are ignored)"""
        return Version(self.numbers)

    def __str__(self) -> str:
        if self.mode is UpdateMode.REGULAR:
            return self.numbers
        return f"{self.numbers}-{self.mode.value}"
