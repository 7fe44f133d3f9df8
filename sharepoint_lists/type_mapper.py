#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""type_mapper module maps SharePoint field types to column types.

Keys represent the SharePoint TypeAsString values while values represent
the semantic type of the column that will hold the field."""

from . import tables

CURRENCY = "Currency"
INTEGER = "Integer"
ID_FIELD = "Id"

TYPE_MAPPING = {
    "Text": tables.TYPE_STRING,
    "Note": tables.TYPE_STRING,
    "ContentTypeId": tables.TYPE_STRING,
    "Choice": tables.TYPE_STRING,
    CURRENCY: tables.TYPE_STRING,
    INTEGER: tables.TYPE_INT,
    "Counter": tables.TYPE_INT,
    "Number": tables.TYPE_FLOAT,
    "DateTime": tables.TYPE_TIMESTAMP,
    "Boolean": tables.TYPE_BOOL,
    "Guid": tables.TYPE_UUID,
    "Lookup": tables.TYPE_INT_ARRAY,
    "MultiChoice": tables.TYPE_STRING_ARRAY,
    "User": tables.TYPE_JSON,
    "Computed": tables.TYPE_JSON,
}


def effective_type(field, overrides, pk_column=ID_FIELD):
    """Returns the SharePoint type of a field once overrides are applied.

    The Id field and the configured item identifier field are always read
    as integers.
    :param field: FieldInfo of the field
    :param overrides: dictionary of field internal name to SharePoint type
    :param pk_column: internal name of the item identifier field"""
    if field.internal_name in (ID_FIELD, pk_column):
        return INTEGER
    return (overrides or {}).get(field.internal_name, field.type_as_string)


def map_type(field, overrides, logger=None, pk_column=ID_FIELD):
    """Returns the semantic column type for a field.

    Unknown SharePoint types are stored as JSON and reported at warning level.
    :param field: FieldInfo of the field
    :param overrides: dictionary of field internal name to SharePoint type
    :param logger: logger used to report unknown types
    :param pk_column: internal name of the item identifier field"""
    sharepoint_type = effective_type(field, overrides, pk_column)
    semantic_type = TYPE_MAPPING.get(sharepoint_type)
    if semantic_type is None:
        if logger:
            logger.warning(
                "Unknown type %s (kind %s) for field %s (%s), assuming JSON"
                % (sharepoint_type, field.field_type_kind, field.title, field.field_id),
                extra={
                    "type": sharepoint_type,
                    "kind": field.field_type_kind,
                    "field_title": field.title,
                    "field_id": field.field_id,
                },
            )
        semantic_type = tables.TYPE_JSON
    return semantic_type
