"""Tests for the in-memory host catalog and the turn queue."""

import pytest

from token_codec.exceptions import HostNotReadyError, SetNotFoundError, TokenNotFoundError
from token_codec.host.catalog import InMemoryCatalog, unique_copy_name
from token_codec.host.turns import TurnQueue


class TestTurnQueue:

    def test_fifo(self):
        turns = TurnQueue()
        seen = []
        turns.schedule(lambda: seen.append(1))
        turns.schedule(lambda: seen.append(2))
        assert len(turns) == 2
        assert turns.run_pending() == 2
        assert seen == [1, 2]
        assert len(turns) == 0

    def test_runs_work_scheduled_while_running(self):
        turns = TurnQueue()
        seen = []
        turns.schedule(lambda: turns.schedule(lambda: seen.append("later")))
        assert turns.run_pending() == 2
        assert seen == ["later"]


class TestInMemoryCatalog:

    def test_from_dict_is_settled(self, catalog):
        brand = catalog.require_token("core", "t-brand")
        assert brand.resolved_value == "#ff0000"

    def test_lookup(self, catalog):
        assert [s.id for s in catalog.sets] == ["core", "dark", "empty"]
        assert catalog.get_set_by_id("nope") is None
        assert catalog.get_set_by_id("dark").get_token_by_id("t-bg").name == "color.bg"

    def test_require_set_missing(self, catalog):
        with pytest.raises(SetNotFoundError) as exc:
            catalog.require_set("nope")
        assert str(exc.value) == "Set not found: nope"

    def test_require_token_missing(self, catalog):
        with pytest.raises(TokenNotFoundError) as exc:
            catalog.require_token("core", "nope")
        assert str(exc.value) == "Token not found: nope"

    def test_new_token_pending_until_turn_runs(self):
        turns = TurnQueue()
        catalog = InMemoryCatalog(turns)
        token_set = catalog.add_set("Core")
        token_set.add_token("color", "color.red", "#f00")
        alias = token_set.add_token("color", "color.brand", "{color.red}")
        with pytest.raises(HostNotReadyError):
            alias.resolved_value
        turns.run_pending()
        assert alias.resolved_value == "#f00"

    def test_without_queue_resolves_immediately(self):
        catalog = InMemoryCatalog()
        token = catalog.add_set("Core").add_token("spacing", "spacing.sm", "4px")
        assert token.resolved_value == "4px"

    def test_broken_alias_resolves_to_none(self):
        catalog = InMemoryCatalog()
        token = catalog.add_set("Core").add_token("color", "c", "{missing}")
        assert token.resolved_value is None

    def test_alias_chain(self):
        catalog = InMemoryCatalog()
        token_set = catalog.add_set("Core")
        token_set.add_token("color", "a", "#123")
        token_set.add_token("color", "b", "{a}")
        c = token_set.add_token("color", "c", "{b}")
        assert c.resolved_value == "#123"

    def test_alias_cycle_resolves_to_none(self):
        catalog = InMemoryCatalog()
        token_set = catalog.add_set("Core")
        token_set.add_token("color", "a", "{b}")
        b = token_set.add_token("color", "b", "{a}")
        assert b.resolved_value is None

    def test_inactive_sets_not_resolved_against(self):
        catalog = InMemoryCatalog()
        catalog.add_set("Off", active=False).add_token("color", "hidden", "#000")
        token = catalog.add_set("On").add_token("color", "c", "{hidden}")
        assert token.resolved_value is None

    def test_mixed_values_resolve_to_themselves(self):
        catalog = InMemoryCatalog()
        token = catalog.add_set("Core").add_token("spacing", "s", "calc({a} + 1px)")
        assert token.resolved_value == "calc({a} + 1px)"

    def test_update_and_remove(self, catalog):
        token = catalog.require_token("core", "t-red")
        token.update(value="#00ff00")
        assert token.resolved_value == "#00ff00"
        token.remove()
        assert catalog.get_set_by_id("core").get_token_by_id("t-red") is None

    def test_to_dict_round_trip(self, catalog, catalog_data):
        assert catalog.to_dict() == {
            "sets": [
                {
                    "id": s["id"],
                    "name": s["name"],
                    "active": s["active"],
                    "tokens": [
                        {
                            "id": t["id"],
                            "name": t["name"],
                            "type": t["type"],
                            "value": t["value"],
                            "description": t.get("description", ""),
                        }
                        for t in s["tokens"]
                    ],
                }
                for s in catalog_data["sets"]
            ],
            "themes": catalog_data["themes"],
        }

    def test_update_re_resolves_aliases(self, catalog):
        brand = catalog.require_token("core", "t-brand")
        catalog.require_token("core", "t-red").update(value="#00ff00")
        assert brand.resolved_value == "#00ff00"

    def test_remove_breaks_aliases(self, catalog):
        brand = catalog.require_token("core", "t-brand")
        catalog.require_token("core", "t-red").remove()
        assert brand.resolved_value is None

    def test_refresh_leaves_pending_tokens(self):
        turns = TurnQueue()
        catalog = InMemoryCatalog(turns)
        pending = catalog.add_set("Core").add_token("color", "c", "#000")
        catalog.refresh()
        with pytest.raises(HostNotReadyError):
            pending.resolved_value


class TestSetsAndThemes:

    def test_themes_loaded(self, catalog):
        assert [(t.group, t.name, t.active) for t in catalog.themes] == [
            ("Mode", "Light", True),
            ("Mode", "Dark", False),
        ]

    def test_duplicate_set(self, catalog):
        copy_set = catalog.require_set("core").duplicate()
        assert copy_set.name == "Core-copy"
        assert catalog.sets[-1] is copy_set
        assert [t.name for t in copy_set.tokens] == [t.name for t in catalog.require_set("core").tokens]
        assert catalog.require_set("core").duplicate().name == "Core-copy-2"

    def test_duplicate_set_copies_values(self, catalog):
        copy_set = catalog.require_set("core").duplicate()
        card = next(t for t in copy_set.tokens if t.name == "shadow.card")
        card.value[0]["blur"] = "99"
        assert catalog.require_token("core", "t-card").value[0]["blur"] == "4"

    def test_remove_set(self, catalog):
        catalog.require_set("dark").remove()
        assert [s.id for s in catalog.sets] == ["core", "empty"]
        assert catalog.themes[1].set_ids == ["core"]

    def test_remove_set_breaks_aliases_into_it(self, catalog):
        token = catalog.require_set("empty").add_token("color", "color.fg", "{color.bg}")
        assert token.resolved_value == "#111111"
        catalog.require_set("dark").remove()
        assert token.resolved_value is None


class TestUniqueCopyName:

    def test_first_copy(self):
        assert unique_copy_name("color.red", {"color.red"}) == "color.red-copy"

    def test_counter(self):
        existing = {"a", "a-copy", "a-copy-2"}
        assert unique_copy_name("a", existing) == "a-copy-3"
