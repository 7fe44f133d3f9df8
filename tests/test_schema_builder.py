#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
import pytest

from sharepoint_lists import tables
from sharepoint_lists.gateway import GatewayException
from sharepoint_lists.schema_builder import ColumnNamer, SchemaBuilder, table_name_for
from sharepoint_lists.selector import FieldSelector


def builder_for(config, gateway, logger):
    return SchemaBuilder(config, gateway, FieldSelector(config), logger)


def test_table_name_for():
    assert table_name_for("My Tasks") == "sharepoint_my_tasks"


def test_simple_list(make_config, my_tasks_gateway, logger):
    table, meta = builder_for(make_config(), my_tasks_gateway, logger).build("My Tasks")

    assert table.name == "sharepoint_my_tasks"
    assert table.description == "My Tasks"
    assert table.column_names == ["sharepoint_listrow_id", "id", "title"]
    assert [column.semantic_type for column in table.columns] == [
        tables.TYPE_UUID,
        tables.TYPE_INT,
        tables.TYPE_STRING,
    ]
    assert meta.title == "My Tasks"
    assert meta.column_map == {
        "id": tables.ColumnMeta("Id", "Integer"),
        "title": tables.ColumnMeta("Title", "Text"),
    }


def test_primary_key_is_first_and_only(make_config, my_tasks_gateway, logger):
    table, meta = builder_for(make_config(), my_tasks_gateway, logger).build("My Tasks")

    assert table.columns[0].name == tables.PK_COLUMN
    assert table.columns[0].description == tables.PK_DESCRIPTION
    assert [column.name for column in table.columns if column.is_primary_key] == [tables.PK_COLUMN]
    assert tables.PK_COLUMN not in meta.column_map


def test_collision_suffixes(make_config, gateway_class, make_field, logger):
    gateway = gateway_class(fields={"L": [
        make_field("Foo", "Text"),
        make_field("foo", "Note"),
        make_field("FOO", "Text"),
    ]})
    config = make_config(list_fields={"L": ["Foo", "foo", "FOO"]})

    table, meta = builder_for(config, gateway, logger).build("L")

    assert table.column_names == [tables.PK_COLUMN, "foo", "foo_1", "foo_2"]
    assert meta.column_map["foo"].sharepoint_name == "Foo"
    assert meta.column_map["foo_1"].sharepoint_name == "foo"
    assert meta.column_map["foo_2"].sharepoint_name == "FOO"


def test_collision_with_an_existing_suffixed_name(make_config, gateway_class, make_field, logger):
    gateway = gateway_class(fields={"L": [
        make_field("foo_1", "Text"),
        make_field("Foo", "Text"),
        make_field("foo", "Text"),
        make_field("sharepoint_listrow_id", "Text"),
    ]})
    config = make_config(list_fields={"L": ["foo_1", "Foo", "foo", "sharepoint_listrow_id"]})

    table, _ = builder_for(config, gateway, logger).build("L")

    names = table.column_names
    assert names == [tables.PK_COLUMN, "foo_1", "foo", "foo_2", "sharepoint_listrow_id_1"]
    assert len(set(names)) == len(names)


def test_selection_fidelity(make_config, gateway_class, make_field, logger):
    fields = [
        make_field("Id", "Counter"),
        make_field("Title", "Text"),
        make_field("Body", "Note"),
        make_field("__metadata", "Computed"),
        make_field("Modified", "DateTime"),
    ]
    config = make_config()
    selector = FieldSelector(config)
    gateway = gateway_class(fields={"L": fields})

    _, meta = builder_for(config, gateway, logger).build("L")

    selected = {column_meta.sharepoint_name for column_meta in meta.column_map.values()}
    assert selected == {f.internal_name for f in fields if selector.should_select("L", f.internal_name)}
    assert "Id" in selected


def test_overrides_are_recorded_in_column_map(make_config, gateway_class, make_field, logger):
    gateway = gateway_class(fields={"L": [make_field("AuthorId", "Lookup"), make_field("Price", "Number")]})
    config = make_config(
        list_fields={"L": ["AuthorId", "Price"]},
        field_overrides={"AuthorId": "Integer", "Price": "Currency"},
    )

    table, meta = builder_for(config, gateway, logger).build("L")

    assert [column.semantic_type for column in table.columns[1:]] == [tables.TYPE_INT, tables.TYPE_STRING]
    assert meta.column_map["author_id"].sharepoint_type == "Integer"
    assert meta.column_map["price"].sharepoint_type == "Currency"


def test_field_description_is_kept(make_config, gateway_class, make_field, logger):
    gateway = gateway_class(fields={"L": [make_field("Title", "Text", description="The title")]})

    table, _ = builder_for(make_config(), gateway, logger).build("L")

    assert table.columns[1].description == "The title"


def test_missing_list_is_skipped(make_config, gateway_class, logger):
    assert builder_for(make_config(), gateway_class(), logger).build("Gone") is None


def test_gateway_errors_propagate(make_config, logger):
    class BrokenGateway:
        def list_fields(self, title):
            raise GatewayException("boom", status_code=500)

    with pytest.raises(GatewayException):
        builder_for(make_config(), BrokenGateway(), logger).build("L")


def test_column_namer_is_per_instance():
    first, second = ColumnNamer(), ColumnNamer()

    assert first.unique("foo") == "foo"
    assert first.unique("foo") == "foo_1"
    assert second.unique("foo") == "foo"


def test_pk_column_field_is_read_as_integer(make_config, gateway_class, make_field, logger):
    config = make_config(pk_column="ItemNumber", list_fields={"L": ["ItemNumber"]}, lists=["L"])
    gateway = gateway_class(fields={"L": [make_field("ItemNumber", "Text")]})

    table, meta = builder_for(config, gateway, logger).build("L")

    assert [column.semantic_type for column in table.columns] == [tables.TYPE_UUID, tables.TYPE_INT]
    assert table.columns[0].name == tables.PK_COLUMN
    assert meta.column_map["item_number"] == tables.ColumnMeta("ItemNumber", "Integer")
