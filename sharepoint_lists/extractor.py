#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""extractor module streams the items of a SharePoint list as table rows.

Items are read page by page and every item is projected on the table
columns. Fields that were expected but not present, and fields that were
present but not mapped to a column, are reported at warning level."""
import json
import uuid
from decimal import Decimal

from .gateway import ListNotFoundException
from .type_mapper import CURRENCY
from .utils import format_fixed_point


class PageDecodeException(Exception):
    """Exception raised when a page of items is not a JSON array of objects."""

    def __init__(self, title, reason):
        super().__init__(f"Failed to decode items page of list {title}: {reason}")

        self.title = title


class TableMetrics:
    """Counters kept per table during a sync."""

    def __init__(self):
        self.resources = 0
        self.errors = 0

    def to_dict(self):
        return {"resources": self.resources, "errors": self.errors}

    def __repr__(self):
        return f"TableMetrics(resources={self.resources}, errors={self.errors})"


def convert_value(column_meta, value):
    """Converts a raw SharePoint value for the column it is stored in.

    Currency values are emitted as fixed-point strings, every other
    value is passed through unchanged.
    :param column_meta: ColumnMeta of the column
    :param value: raw value taken from the list item"""
    if column_meta.sharepoint_type == CURRENCY:
        return format_fixed_point(value)
    return value


def decode_items(title, payload):
    """Decodes a page payload into a list of item dictionaries
    :param title: title of the list, used in error messages
    :param payload: JSON array of item objects, bytes or str"""
    try:
        items = json.loads(payload, parse_float=Decimal)
    except (TypeError, ValueError) as exception:
        raise PageDecodeException(title, exception) from exception
    if not isinstance(items, list):
        raise PageDecodeException(title, f"expected an array, got {type(items).__name__}")
    for item in items:
        if not isinstance(item, dict):
            raise PageDecodeException(title, f"expected objects, got {type(item).__name__}")
    return items


class Extractor:
    """This class streams rows for one table at a time."""

    def __init__(self, gateway, logger):
        self.gateway = gateway
        self.logger = logger

    def build_row(self, table, meta, item):
        """Projects an item on the table columns.

        Consumed keys are removed from item, so whatever stays in it
        afterwards was not mapped to any column.
        :param table: TableSchema of the list
        :param meta: TableMeta of the list
        :param item: item dictionary, modified in place
        Returns:
            (row, missing) tuple, missing being the sorted SharePoint names not found in the item
        """
        row = [None] * len(table.columns)
        missing = []
        for index, column in enumerate(table.columns):
            if column.is_primary_key:
                row[index] = str(uuid.uuid4())
                continue
            column_meta = meta.column_map[column.name]
            if column_meta.sharepoint_name not in item:
                missing.append(column_meta.sharepoint_name)
                continue
            row[index] = convert_value(column_meta, item.pop(column_meta.sharepoint_name))
        return row, sorted(missing)

    def extract(self, table, meta, cancellation, sink, metrics):
        """Sends every item of the list to the sink
        :param table: TableSchema of the list
        :param meta: TableMeta of the list
        :param cancellation: CancellationToken checked before each page and row
        :param sink: Sink receiving the rows
        :param metrics: TableMetrics of the table
        """
        log_extra = {"table": table.name}
        self.logger.info("Fetching the items of list %s into table %s" % (meta.title, table.name), extra=log_extra)
        try:
            cursor = self.gateway.list_items_paged(meta.title)
        except ListNotFoundException:
            self.logger.info("List %s is gone, nothing to fetch" % meta.title, extra=log_extra)
            return

        while True:
            items = decode_items(meta.title, cursor.items_json())
            for item in items:
                self.logger.debug(
                    "Item keys: %s" % sorted(item),
                    extra={"table": table.name, "keys": sorted(item)},
                )
                row, missing = self.build_row(table, meta, item)
                if missing:
                    self.logger.warning(
                        "Missing columns in result for table %s: %s" % (table.name, missing),
                        extra={"table": table.name, "missing_columns": missing},
                    )
                if item:
                    extra_columns = sorted(item)
                    self.logger.warning(
                        "Extra columns found in result for table %s: %s" % (table.name, extra_columns),
                        extra={"table": table.name, "extra_columns": extra_columns},
                    )

                cancellation.raise_if_cancelled()
                sink.send(table.name, row, cancellation)
                metrics.resources += 1

            if not cursor.has_next_page():
                break
            cancellation.raise_if_cancelled()
            try:
                cursor = cursor.next()
            except ListNotFoundException:
                self.logger.info("List %s disappeared while paging" % meta.title, extra=log_extra)
                return

        self.logger.info(
            "Successfully fetched %s rows for table %s" % (metrics.resources, table.name),
            extra=log_extra,
        )
