"""Tests de comparación de versiones de mkcert."""

from __future__ import annotations

import pytest

from adapters.state_store import StateStore
from core.domain.models import Version
from core.services.version_manager import VersionManager


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("v1.4.4", (1, 4, 4)),
        ("1.4.4", (1, 4, 4)),
        ("mkcert version v1.4.3", (1, 4, 3)),
        ("v2", (2, 0, 0)),
    ],
)
def test_parse_free_form_versions(raw: str, expected: tuple[int, int, int]) -> None:
    parsed = Version.parse(raw)
    assert parsed is not None
    assert parsed.as_tuple() == expected


@pytest.mark.parametrize("raw", [None, "", "latest", "vX.Y"])
def test_parse_unparsable_is_unknown(raw: str | None) -> None:
    assert Version.parse(raw) is None


def test_same_version_does_not_update(state: StateStore) -> None:
    state.set_version("v1.4.4")
    info = VersionManager(state=state).compare("v1.4.4")
    assert info.should_update is False
    assert info.breaking_change is False


def test_same_version_with_different_prefix_does_not_update(state: StateStore) -> None:
    state.set_version("1.4.4")
    info = VersionManager(state=state).compare("v1.4.4")
    assert info.should_update is False


def test_major_bump_is_breaking(state: StateStore) -> None:
    state.set_version("v1.4.4")
    info = VersionManager(state=state).compare("v2.0.0")
    assert info.should_update is True
    assert info.breaking_change is True
    assert info.current_version == "v1.4.4"
    assert info.next_version == "v2.0.0"


def test_minor_and_patch_bumps_are_safe(state: StateStore) -> None:
    manager = VersionManager(state=state)
    state.set_version("v1.4.3")

    patch = manager.compare("v1.4.4")
    minor = manager.compare("v1.5.0")

    assert (patch.should_update, patch.breaking_change) == (True, False)
    assert (minor.should_update, minor.breaking_change) == (True, False)


def test_older_release_is_not_an_update(state: StateStore) -> None:
    state.set_version("v1.4.4")
    info = VersionManager(state=state).compare("v1.3.9")
    assert info.should_update is False
    assert info.breaking_change is False


def test_downgrade_across_major_is_not_breaking(state: StateStore) -> None:
    state.set_version("v2.0.0")
    info = VersionManager(state=state).compare("v1.9.9")
    assert info.should_update is False
    assert info.breaking_change is False


def test_unknown_current_version_always_updates(state: StateStore) -> None:
    info = VersionManager(state=state).compare("v1.4.4")
    assert info.current_version is None
    assert info.should_update is True
    assert info.breaking_change is False


def test_unparsable_latest_never_updates(state: StateStore) -> None:
    state.set_version("v1.4.4")
    info = VersionManager(state=state).compare("nightly")
    assert info.should_update is False
    assert info.next_version == "nightly"


def test_update_persists_version(state: StateStore, settings) -> None:
    VersionManager(state=state).update("v1.4.4")

    reloaded = StateStore(settings.state_file)
    reloaded.init()
    assert reloaded.get_version() == "v1.4.4"
