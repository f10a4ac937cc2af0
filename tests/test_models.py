"""Tests for binding models and bindable base classes."""

import pytest
from snapshot_binding import BindableObject, BindableSnapshot, MISSING, Registrar
from snapshot_binding.models import Accessor, Binding
from snapshot_binding.types import BindingKind, TargetKind
from sample_models import Address, Group, Item, Member, Person, Tagged


class TestAccessor:
    """Tests for Accessor class."""

    def test_get_unbound_is_missing(self):
        """Test that a never-bound attribute reads as MISSING."""
        item = Item()
        assert Accessor("fieldX").get(item) is MISSING

    def test_class_default_is_missing(self):
        """Test that class-level defaults do not count as bound."""
        item = Item()
        assert item.id is None
        assert Accessor("id").get(item) is MISSING

    def test_set_and_clear(self):
        item = Item()
        accessor = Accessor("fieldX")

        accessor.set(item, 0)
        assert accessor.get(item) == 0

        accessor.clear(item)
        assert accessor.get(item) is MISSING

    def test_explicit_none_is_bound(self):
        item = Item()
        Accessor("fieldX").set(item, None)
        assert Accessor("fieldX").get(item) is None

    def test_empty_attribute(self):
        with pytest.raises(ValueError, match="attribute cannot be empty"):
            Accessor("")

    def test_slot(self):
        item = Item()
        slot = Accessor("fieldY").bind(item)
        slot.set("t")
        assert item.fieldY == "t"
        assert slot.get() == "t"


class TestBinding:
    """Tests for Binding class."""

    def test_empty_name(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            Binding(name="", kind=BindingKind.FIELD, accessor=Accessor("x"))

    def test_object_requires_target_type(self):
        with pytest.raises(ValueError, match="requires a target_type"):
            Binding(name="address", kind=BindingKind.OBJECT, accessor=Accessor("address"))

    def test_mapper_only_on_fields(self):
        with pytest.raises(ValueError, match="only supported on field bindings"):
            Binding(name="tags", kind=BindingKind.DICTIONARY, accessor=Accessor("tags"),
                    mapper=str)

    def test_describe_dictionary(self):
        binding = Tagged.bindings()[1]
        assert binding.describe() == {
            "name": "tags",
            "kind": "dictionary",
            "attribute": "tags",
            "keyType": "str",
            "valueType": "bool",
        }

    def test_describe_list(self):
        binding = Group.bindings()[2]
        assert binding.describe()["targetType"] == "Member"


class TestRegistrar:
    """Tests for Registrar class."""

    def test_declaration_order(self):
        names = [binding.name for binding in Group.bindings()]
        assert names == ["title", "address", "members"]

    def test_attribute_override(self):
        binding = Person.bindings()[2]
        assert binding.name == "isFancy"
        assert binding.accessor.attribute == "is_fancy"

    def test_duplicate_name(self):
        registrar = Registrar(Item)
        registrar.bind_field("fieldX")
        with pytest.raises(ValueError, match="duplicate binding 'fieldX'"):
            registrar.bind_field("fieldX")

    def test_object_requires_bindable(self):
        with pytest.raises(TypeError, match="requires a BindableObject subclass"):
            Registrar(Item).bind_object("address", dict)

    def test_list_requires_snapshot(self):
        """Test that list elements must capture their sub-key."""
        with pytest.raises(TypeError, match="requires a BindableSnapshot subclass"):
            Registrar(Group).bind_list("addresses", Address)

    def test_chaining(self):
        registrar = Registrar(Item).bind_field("a").bind_field("b")
        assert len(registrar.bindings) == 2


class TestBindable:
    """Tests for BindableObject and BindableSnapshot."""

    def test_target_kinds(self):
        assert Address.target_kind == TargetKind.OBJECT
        assert Member.target_kind == TargetKind.SNAPSHOT

    def test_bindings_cached_per_class(self):
        assert Item.bindings() == Item.bindings()
        assert Item.bindings() is not Item.bindings()

    def test_snapshot_gets_identity_binding(self):
        bindings = Item.effective_bindings("id")
        assert bindings[0].name == "id"
        assert bindings[0].accessor.attribute == "id"
        assert [binding.name for binding in bindings[1:]] == ["fieldX", "fieldY"]

    def test_custom_identity_name(self):
        bindings = Item.effective_bindings("key")
        assert bindings[0].name == "key"
        assert bindings[0].accessor.attribute == "id"

    def test_declared_identity_replaces_implicit(self):
        class Keyed(BindableSnapshot):
            @classmethod
            def declare_bindings(cls, registrar):
                registrar.bind_field("id", attribute="uid")

        bindings = Keyed.effective_bindings("id")
        assert len(bindings) == 1
        assert bindings[0].accessor.attribute == "uid"

    def test_identity_must_be_field(self):
        class Broken(BindableSnapshot):
            @classmethod
            def declare_bindings(cls, registrar):
                registrar.bind_object("id", Address)

        with pytest.raises(ValueError, match="must be a field binding"):
            Broken.effective_bindings("id")

    def test_object_has_no_identity_binding(self):
        assert [binding.name for binding in Address.effective_bindings("id")] == ["street", "city"]

    def test_equality_and_repr(self):
        first, second = Item(), Item()
        first.fieldX = 0
        second.fieldX = 0
        assert first == second
        assert repr(first) == "Item(fieldX=0)"

        second.fieldY = "t"
        assert first != second
        assert first != Member()

    def test_abstract_declaration(self):
        with pytest.raises(TypeError):
            BindableObject()
