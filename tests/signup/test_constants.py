from datetime import timedelta

import pytest

from core.errors import InvalidListReference
from cogs.signup.constants import (
    LIST_DEFINITIONS,
    ListDefinition,
    _build_index,
    get_by_name,
    resolve_list,
)


class TestRegistry:

    def test_ids_and_names_are_unique(self):
        assert len({d.id for d in LIST_DEFINITIONS}) == len(LIST_DEFINITIONS)
        assert len({d.name for d in LIST_DEFINITIONS}) == len(LIST_DEFINITIONS)

    def test_crystal_of_chaos(self):
        definition = resolve_list("1")

        assert definition.name == "Crystal of Chaos"
        assert definition.cooldown == timedelta(weeks=1)
        assert get_by_name("Crystal of Chaos") is definition

    def test_resolve_ignores_whitespace(self):
        assert resolve_list(" 2 ").name == "Abyssal Raid"

    def test_unknown_id_names_discovery_command(self):
        with pytest.raises(InvalidListReference) as exc_info:
            resolve_list("99", prefix="?")

        assert exc_info.value.list_id == "99"
        assert "?list lists" in exc_info.value.message

    def test_definitions_are_immutable(self):
        with pytest.raises(Exception):
            LIST_DEFINITIONS[0].name = "Other"


class TestBuildIndex:

    def test_rejects_duplicate_id(self):
        definitions = (
            ListDefinition("1", "A", timedelta(days=1)),
            ListDefinition("1", "B", timedelta(days=1)),
        )
        with pytest.raises(ValueError):
            _build_index(definitions)

    def test_rejects_non_positive_cooldown(self):
        with pytest.raises(ValueError):
            _build_index((ListDefinition("1", "A", timedelta(0)),))
