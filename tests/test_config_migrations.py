"""Tests for the versioned board configuration migration chain."""

import copy

import pytest

from vrr_departures.application.services.config_migrations import (
    UnsupportedConfigVersionError,
    detect_version,
    migrate,
    upgrade,
)


def test_untagged_v1_record_upgrades_to_current() -> None:
    """Given an untagged v1 record, when upgraded, then every field lands in the v3 shape with defaults."""
    raw = {"stops": [{"id": "A"}], "refresh": 30}

    result = upgrade(raw)

    assert result == {
        "version": 3,
        "stops": [
            {
                "id": "A",
                "name": "A",
                "label": None,
                "platforms": [],
                "timeFrom": None,
                "timeTo": None,
            }
        ],
        "refreshIntervalSeconds": 30,
        "maxDeparturesPerStop": 10,
    }


def test_v1_keeps_existing_names() -> None:
    """Given a v1 stop with a name, when migrated, then the name is preserved."""
    result = migrate({"stops": [{"id": "A", "name": "Essen Hbf"}], "refresh": 45}, 1)

    assert result["version"] == 2
    assert result["refreshIntervalSeconds"] == 45
    assert result["stops"] == [{"id": "A", "name": "Essen Hbf", "label": None, "platform": None}]


def test_v2_platform_becomes_platform_set() -> None:
    """Given a v2 stop with a single platform, when migrated, then it becomes a one-element platform list."""
    raw = {
        "version": 2,
        "stops": [
            {"id": "A", "name": "A", "label": "Home", "platform": "3"},
            {"id": "B", "name": "B", "label": None, "platform": None},
        ],
        "refreshIntervalSeconds": 20,
    }

    result = migrate(raw, 2)

    assert result["stops"][0] == {
        "id": "A",
        "name": "A",
        "label": "Home",
        "platforms": ["3"],
        "timeFrom": None,
        "timeTo": None,
    }
    assert result["stops"][1]["platforms"] == []
    assert result["maxDeparturesPerStop"] == 10
    assert result["refreshIntervalSeconds"] == 20


def test_migration_does_not_modify_input() -> None:
    """Given a raw record, when migrated, then the input dict is left untouched."""
    raw = {"stops": [{"id": "A"}], "refresh": 30}
    before = copy.deepcopy(raw)

    upgrade(raw)

    assert raw == before


def test_upgrading_a_current_record_is_a_no_op() -> None:
    """Given a v3 record, when upgraded again, then it comes back unchanged."""
    current = upgrade({"stops": [{"id": "A"}], "refresh": 30})

    assert upgrade(current) == current
    assert migrate(current, 3) == current


@pytest.mark.parametrize("version", [0, 4, 99, "3", 2.0, True, None])
def test_unrecognized_version_is_rejected(version: object) -> None:
    """Given an unknown version tag, when detecting the version, then it is rejected."""
    with pytest.raises(UnsupportedConfigVersionError):
        detect_version({"version": version, "stops": []})


def test_malformed_stop_entries_are_dropped() -> None:
    """Given a stop entry that is not an object, when migrated, then only valid entries survive."""
    result = upgrade({"stops": [{"id": "A"}, "garbage", 42], "refresh": 30})

    assert [s["id"] for s in result["stops"]] == ["A"]
