"""Layered scope lookups."""

from __future__ import annotations

from types import SimpleNamespace

from imprint.scope import MISSING, Scope, lookup_member, lookup_name, visible_names


class TestScope:
    def test_inner_frame_shadows_parent(self) -> None:
        scope = Scope({"item": "inner"}, parent={"item": "outer", "title": "T"})
        assert scope.lookup("item") == "inner"
        assert scope.lookup("title") == "T"

    def test_child_chain(self) -> None:
        root = Scope({"a": 1})
        leaf = root.child({"b": 2}).child({"a": 3})
        assert (leaf.lookup("a"), leaf.lookup("b")) == (3, 2)
        assert root.lookup("a") == 1

    def test_object_root(self) -> None:
        scope = Scope({}, parent=SimpleNamespace(title="T"))
        assert scope.lookup("title") == "T"

    def test_missing(self) -> None:
        assert Scope({}, parent=None).lookup("x") is MISSING
        assert not MISSING
        assert repr(MISSING) == "MISSING"

    def test_frame_is_copied(self) -> None:
        frame = {"a": 1}
        scope = Scope(frame)
        frame["a"] = 2
        assert scope.lookup("a") == 1

    def test_names(self) -> None:
        scope = Scope({"item": 1}, parent={"title": "T", 3: "ignored"})
        assert scope.names() == frozenset({"item", "title"})
        assert set(scope) == {"item", "title"}


class TestLookupHelpers:
    def test_lookup_name_on_plain_models(self) -> None:
        assert lookup_name({"a": 1}, "a") == 1
        assert lookup_name(SimpleNamespace(a=1), "a") == 1
        assert lookup_name(None, "a") is MISSING

    def test_lookup_member_prefers_mapping_key(self) -> None:
        assert lookup_member({"keys": "value"}, "keys") == "value"
        assert callable(lookup_member({}, "keys"))
        assert lookup_member(SimpleNamespace(), "nope") is MISSING

    def test_visible_names_hides_private_attributes(self) -> None:
        names = visible_names(SimpleNamespace(title="T", _secret=1))
        assert "title" in names
        assert "_secret" not in names
