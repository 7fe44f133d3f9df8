#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""Module containing the table definitions produced from SharePoint lists.

A TableSchema describes the columns that will be emitted for a list,
while the paired TableMeta remembers which SharePoint field feeds
each of those columns."""
from collections import namedtuple

TYPE_STRING = "string"
TYPE_INT = "int64"
TYPE_FLOAT = "float64"
TYPE_TIMESTAMP = "timestamp"
TYPE_BOOL = "bool"
TYPE_UUID = "uuid"
TYPE_INT_ARRAY = "int64_array"
TYPE_STRING_ARRAY = "string_array"
TYPE_JSON = "json"

TABLE_PREFIX = "sharepoint_"
PK_COLUMN = "sharepoint_listrow_id"
PK_DESCRIPTION = "The unique identifier of the list item."

ColumnMeta = namedtuple("ColumnMeta", ["sharepoint_name", "sharepoint_type"])


class Column:
    """A single column of a table."""

    def __init__(self, name, semantic_type, description="", is_primary_key=False):
        self.name = name
        self.semantic_type = semantic_type
        self.description = description
        self.is_primary_key = is_primary_key

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "type": self.semantic_type,
            "primary_key": self.is_primary_key,
        }

    def __repr__(self):
        return f"Column({self.name!r}, {self.semantic_type!r})"


class TableSchema:
    """Ordered set of columns emitted for one SharePoint list."""

    def __init__(self, name, description="", columns=None):
        self.name = name
        self.description = description
        self.columns = columns if columns is not None else []

    @property
    def column_names(self):
        return [column.name for column in self.columns]

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "columns": [column.to_dict() for column in self.columns],
        }


class TableMeta:
    """Links a table back to its SharePoint list.

    column_map maps every non primary key column name to the ColumnMeta
    of the field it was built from."""

    def __init__(self, title, column_map=None):
        self.title = title
        self.column_map = column_map if column_map is not None else {}

    def to_dict(self):
        return {
            "title": self.title,
            "column_map": {name: meta._asdict() for name, meta in self.column_map.items()},
        }
