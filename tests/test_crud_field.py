import pytest

from crudpanel.core.errors import MissingNameAttribute, ReservedAttributeError
from crudpanel.core.fields import CrudField, CrudPanel


def test_new_field_is_created_with_only_its_name(panel):
    field = CrudField(panel, "price")

    assert field.attributes == {"name": "price"}
    assert panel.fields() == [{"name": "price"}]


def test_existing_field_is_loaded_in_full(panel):
    panel.add_field({"name": "price", "type": "number", "label": "Price"})

    field = CrudField(panel, "price")

    assert field.attributes == {"name": "price", "type": "number", "label": "Price"}
    assert panel.fields() == [{"name": "price", "type": "number", "label": "Price"}]


def test_dynamic_setters_chain_and_persist_each_call(panel):
    field = panel.field("price").type("number")
    assert panel.fields() == [{"name": "price", "type": "number"}]

    returned = field.label("Price")
    assert returned is field
    assert panel.fields() == [{"name": "price", "type": "number", "label": "Price"}]


def test_later_sets_overwrite_and_merge_with_stored_attributes(panel):
    panel.add_field({"name": "price", "type": "text", "hint": "net"})
    panel.add_field({"name": "title"})

    panel.field("price").type("number").prefix("$").type("money")

    assert panel.first_field_where("name", "price") == {
        "name": "price",
        "type": "money",
        "hint": "net",
        "prefix": "$",
    }
    assert panel.first_field_where("name", "title") == {"name": "title"}


def test_set_allows_attributes_that_collide_with_methods(panel):
    panel.field("price").set("remove", True).set("attributes", {"step": 2})

    assert panel.first_field_where("name", "price") == {
        "name": "price",
        "remove": True,
        "attributes": {"step": 2},
    }


def test_dynamic_setter_uses_only_first_argument(panel):
    panel.field("price").type("number", "ignored", "also ignored")

    assert panel.first_field_where("name", "price") == {"name": "price", "type": "number"}


def test_dynamic_setter_without_value_raises(panel):
    field = panel.field("price")
    with pytest.raises(TypeError):
        field.type()


def test_private_names_are_not_dispatched(panel):
    field = panel.field("price")
    with pytest.raises(AttributeError):
        field._secret("x")
    assert panel.fields() == [{"name": "price"}]


def test_nested_values_are_copied_into_the_panel(panel):
    options = {"min": 0}
    panel.field("price").attributes_(options)
    options["min"] = 10

    assert panel.first_field_where("name", "price")["attributes_"] == {"min": 0}


def test_remove_deletes_only_that_field_and_keeps_order(panel):
    panel.add_fields(["a", "price", "b"])

    assert panel.field("price").remove() is None

    assert [f["name"] for f in panel.fields()] == ["a", "b"]


def test_remove_leaves_builder_state_stale(panel):
    field = panel.field("price").type("number")
    field.remove()

    assert field.attributes == {"name": "price", "type": "number"}
    assert "price" not in panel


def test_forget_drops_attribute_from_panel_and_builder(panel):
    field = panel.field("price").type("number").label("Price")

    assert field.forget("type") is field

    assert panel.fields() == [{"name": "price", "label": "Price"}]
    assert field.attributes == {"name": "price", "label": "Price"}


def test_forgotten_attribute_is_not_resurrected_by_later_sets(panel):
    field = panel.field("price").type("number")
    field.forget("type").label("Price")

    assert panel.fields() == [{"name": "price", "label": "Price"}]


def test_forget_missing_attribute_is_noop(panel):
    panel.add_fields([{"name": "price", "type": "number"}, "title"])

    panel.field("price").forget("does_not_exist")

    assert panel.fields() == [{"name": "price", "type": "number"}, {"name": "title"}]


def test_forget_name_is_rejected(panel):
    field = panel.field("price")
    with pytest.raises(ReservedAttributeError):
        field.forget("name")
    assert panel.fields() == [{"name": "price"}]


@pytest.mark.parametrize("bad", ["", None])
def test_empty_name_is_a_precondition_violation(panel, bad):
    with pytest.raises(MissingNameAttribute):
        CrudField(panel, bad)
    assert len(panel) == 0


def test_saving_twice_is_idempotent(panel):
    panel.add_field({"name": "price", "type": "number"})

    CrudField(panel, "price")
    once = panel.fields()
    CrudField(panel, "price")

    assert panel.fields() == once == [{"name": "price", "type": "number"}]


def test_independent_builders_last_save_wins(panel):
    first = panel.field("price")
    second = panel.field("price")

    first.type("number")
    second.label("Price")

    # second builder's snapshot predates first.type()
    assert panel.fields() == [{"name": "price", "label": "Price"}]


def test_end_to_end_scenario():
    panel = CrudPanel()

    field = CrudField.name("price", panel=panel)
    assert panel.fields() == [{"name": "price"}]

    field.type("number")
    assert panel.fields() == [{"name": "price", "type": "number"}]

    field.label("Price")
    assert panel.fields() == [{"name": "price", "type": "number", "label": "Price"}]

    field.forget("type")
    assert panel.fields() == [{"name": "price", "label": "Price"}]

    field.remove()
    assert panel.fields() == []


@pytest.mark.parametrize("new_name", ["cost", "", None])
def test_set_name_is_rejected_and_builder_stays_usable(panel, new_name):
    field = panel.field("price").type("number")

    with pytest.raises(ReservedAttributeError):
        field.set("name", new_name)

    assert field.attributes == {"name": "price", "type": "number"}
    field.label("Price")
    assert panel.fields() == [{"name": "price", "type": "number", "label": "Price"}]


def test_set_name_never_overwrites_another_field(panel):
    panel.add_field({"name": "cost", "type": "money"})
    field = panel.field("price").type("number")

    with pytest.raises(ReservedAttributeError):
        field.set("name", "cost")

    assert panel.fields() == [{"name": "cost", "type": "money"}, {"name": "price", "type": "number"}]
