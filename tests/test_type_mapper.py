#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
import logging

import pytest

from sharepoint_lists import tables
from sharepoint_lists.gateway import FieldInfo
from sharepoint_lists.type_mapper import effective_type, map_type


@pytest.mark.parametrize(
    "sharepoint_type, semantic_type",
    [
        ("Text", tables.TYPE_STRING),
        ("Note", tables.TYPE_STRING),
        ("ContentTypeId", tables.TYPE_STRING),
        ("Choice", tables.TYPE_STRING),
        ("Currency", tables.TYPE_STRING),
        ("Integer", tables.TYPE_INT),
        ("Counter", tables.TYPE_INT),
        ("Number", tables.TYPE_FLOAT),
        ("DateTime", tables.TYPE_TIMESTAMP),
        ("Boolean", tables.TYPE_BOOL),
        ("Guid", tables.TYPE_UUID),
        ("Lookup", tables.TYPE_INT_ARRAY),
        ("MultiChoice", tables.TYPE_STRING_ARRAY),
        ("User", tables.TYPE_JSON),
        ("Computed", tables.TYPE_JSON),
    ],
)
def test_map_type(sharepoint_type, semantic_type):
    assert map_type(FieldInfo("Field", sharepoint_type), {}) == semantic_type


def test_unknown_type_is_json_and_logged(caplog):
    caplog.set_level(logging.WARNING)
    field = FieldInfo("Geo", "Geolocation", title="Location", field_type_kind=31, field_id="abc-123")

    assert map_type(field, {}, logging.getLogger("tests.type_mapper")) == tables.TYPE_JSON

    [record] = caplog.records
    assert record.levelno == logging.WARNING
    assert record.type == "Geolocation"
    assert record.kind == 31
    assert record.field_id == "abc-123"


def test_override_replaces_type_before_mapping():
    field = FieldInfo("AuthorId", "Lookup")

    assert effective_type(field, {"AuthorId": "Integer"}) == "Integer"
    assert map_type(field, {"AuthorId": "Integer"}) == tables.TYPE_INT


def test_override_to_currency():
    field = FieldInfo("Price", "Number")

    assert effective_type(field, {"Price": "Currency"}) == "Currency"
    assert map_type(field, {"Price": "Currency"}) == tables.TYPE_STRING


def test_id_is_always_integer():
    field = FieldInfo("Id", "Counter")

    assert effective_type(field, {}) == "Integer"
    assert effective_type(field, {"Id": "Text"}) == "Integer"
    assert map_type(field, None) == tables.TYPE_INT


def test_configured_identifier_is_always_integer():
    field = FieldInfo("ItemNumber", "Text")

    assert effective_type(field, {}, pk_column="ItemNumber") == "Integer"
    assert map_type(field, {}, pk_column="ItemNumber") == tables.TYPE_INT
    assert effective_type(field, {}) == "Text"


def test_fields_without_override_keep_their_type():
    assert effective_type(FieldInfo("Title", "Text"), {"AuthorId": "Integer"}) == "Text"
