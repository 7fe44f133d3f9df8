#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""schema_builder module derives a table definition from the fields of a list.

Each list becomes a table named sharepoint_<normalized title>. The first
column is always a synthesized primary key, followed by one column per
selected field in the order SharePoint returns the fields."""

from . import tables
from .gateway import ListNotFoundException
from .normalizer import normalize
from .type_mapper import effective_type, map_type


def table_name_for(title):
    """Returns the table name for a list title"""
    return tables.TABLE_PREFIX + normalize(title)


class ColumnNamer:
    """Hands out unique column names within a single table.

    The first column with a given name keeps it, later ones get a
    _<n> suffix where n is the number of prior occurrences. A suffixed
    name that is already taken moves on to the next free n."""

    def __init__(self, reserved=()):
        self.seen_count = {}
        self.used = set(reserved)

    def unique(self, name):
        count = self.seen_count.get(name, 0)
        candidate = name if count == 0 else f"{name}_{count}"
        while candidate in self.used:
            count += 1
            candidate = f"{name}_{count}"
        self.seen_count[name] = count + 1
        self.used.add(candidate)
        return candidate


class SchemaBuilder:
    """This class builds TableSchema and TableMeta pairs for SharePoint lists."""

    def __init__(self, config, gateway, selector, logger):
        self.gateway = gateway
        self.selector = selector
        self.logger = logger
        self.overrides = config.get_value("field_overrides") or {}
        self.pk_column = config.get_value("pk_column")

    def primary_key_column(self):
        return tables.Column(
            tables.PK_COLUMN,
            tables.TYPE_UUID,
            description=tables.PK_DESCRIPTION,
            is_primary_key=True,
        )

    def build(self, title):
        """Builds the table definition for a list
        :param title: title of the SharePoint list
        Returns:
            (TableSchema, TableMeta) tuple, or None if the list does not exist
        """
        table = tables.TableSchema(table_name_for(title), description=title)
        try:
            fields = self.gateway.list_fields(title)
        except ListNotFoundException:
            self.logger.info(
                "List %s was not found, skipping table %s" % (title, table.name),
                extra={"table": table.name},
            )
            return None

        meta = tables.TableMeta(title)
        table.columns.append(self.primary_key_column())

        namer = ColumnNamer(reserved=[tables.PK_COLUMN])
        for field in fields:
            if not self.selector.should_select(title, field.internal_name):
                continue
            column_name = namer.unique(normalize(field.internal_name))
            column = tables.Column(
                column_name,
                map_type(field, self.overrides, self.logger, self.pk_column),
                description=field.description,
            )
            table.columns.append(column)
            meta.column_map[column_name] = tables.ColumnMeta(
                sharepoint_name=field.internal_name,
                sharepoint_type=effective_type(field, self.overrides, self.pk_column),
            )

        self.logger.debug(
            "Built table %s with columns %s" % (table.name, table.column_names),
            extra={"table": table.name},
        )
        return table, meta
