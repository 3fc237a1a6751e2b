"""Tests for version parsing and resolution."""

import logging

import pytest
from hypothesis import given, strategies as st

from birdhouse_deploy.api.exceptions import VersionFormatError
from birdhouse_deploy.constants import UpdateMode
from birdhouse_deploy.core import resolve_version, select_mode
from birdhouse_deploy.models.version import AppVersion

version_parts = st.lists(st.integers(min_value=0, max_value=10_000), min_size=1, max_size=4)


def test_parse_stored_version_with_marker() -> None:
    version = AppVersion.parse("1.2.3.4-f")

    assert version.parts == (1, 2, 3, 4)
    assert version.mode is UpdateMode.FORCED
    assert str(version) == "1.2.3.4-f"


@pytest.mark.parametrize("value", ["one.two", "1.0.0-beta", "\u0661.0-f"])
def test_parse_rejects_garbage(value: str) -> None:
    with pytest.raises(VersionFormatError):
        AppVersion.parse(value)


@pytest.mark.parametrize("value,expected", [
    ("2", "2.0.0.0"),
    ("2.1", "2.1.0.0"),
    ("2.1.3", "2.1.3.0"),
    ("2.1.3.7", "2.1.3.7"),
])
def test_parse_target_pads_to_four_parts(value: str, expected: str) -> None:
    assert str(AppVersion.parse_target(value)) == expected


@pytest.mark.parametrize("value", [
    "1.2.3.4.5", "1.a", "v1", "1.2-f", "", "1..2",
    "1.2.3\n", "\u0661.\u0662",
])
def test_parse_target_rejects_invalid_values(value: str) -> None:
    with pytest.raises(VersionFormatError):
        AppVersion.parse_target(value)


@given(version_parts)
def test_bump_increments_fourth_part(parts) -> None:
    """Bumping pads to four parts and only touches the last one."""
    version = AppVersion(parts=tuple(parts))
    bumped = version.bump()
    padded = version.padded()

    assert len(bumped.parts) == 4
    assert bumped.parts[:3] == padded.parts[:3]
    assert bumped.parts[3] == padded.parts[3] + 1
    assert bumped.to_packaging() > version.to_packaging()


@given(version_parts, st.sampled_from(list(UpdateMode)))
def test_resolve_without_target_keeps_number(parts, mode) -> None:
    current = AppVersion(parts=tuple(parts), mode=UpdateMode.FORCED)
    resolved = resolve_version(current, None, mode)

    assert resolved.parts == current.parts
    assert resolved.mode is mode


def test_resolve_bump_drops_previous_marker() -> None:
    current = AppVersion.parse("1.2.3.4-s")

    assert str(resolve_version(current, "", UpdateMode.REGULAR)) == "1.2.3.5"
    assert str(resolve_version(current, "", UpdateMode.FORCED)) == "1.2.3.5-f"


def test_resolve_explicit_target() -> None:
    current = AppVersion.parse("1.2.3.4")

    assert str(resolve_version(current, "2.0", UpdateMode.SILENT)) == "2.0.0.0-s"


def test_resolve_lower_target_warns(caplog) -> None:
    current = AppVersion.parse("3.0.0.0")

    with caplog.at_level(logging.WARNING):
        resolved = resolve_version(current, "1.0", UpdateMode.REGULAR)

    assert str(resolved) == "1.0.0.0"
    assert "lower than the current version" in caplog.text


def test_resolve_invalid_target_raises() -> None:
    with pytest.raises(VersionFormatError):
        resolve_version(AppVersion.parse("1.0.0.0"), "1.0.x", UpdateMode.REGULAR)


@pytest.mark.parametrize("forced,silent,expected", [
    (False, False, UpdateMode.REGULAR),
    (True, False, UpdateMode.FORCED),
    (False, True, UpdateMode.SILENT),
    (True, True, UpdateMode.FORCED),
])
def test_select_mode_forced_wins(forced: bool, silent: bool, expected: UpdateMode) -> None:
    assert select_mode(forced=forced, silent=silent) is expected


def test_bump_with_forced_mode_example() -> None:
    current = AppVersion.parse("1.2.3.4")

    assert str(resolve_version(current, "", UpdateMode.REGULAR)) == "1.2.3.5"
    assert str(resolve_version(current, "", select_mode(forced=True))) == "1.2.3.5-f"
