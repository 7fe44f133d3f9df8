#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""selector module decides which list fields become table columns."""


class FieldSelector:
    """Applies the ignore_fields, list_fields and default_fields settings.

    Field names are compared by exact, case sensitive, internal name."""

    def __init__(self, config):
        self.ignore_fields = set(config.get_value("ignore_fields") or [])
        self.default_fields = set(config.get_value("default_fields") or [])
        self.list_fields = {
            title: set(fields or [])
            for title, fields in (config.get_value("list_fields") or {}).items()
        }

    def should_select(self, list_title, field_name):
        """Returns True if the field should be emitted for the list
        :param list_title: title of the SharePoint list
        :param field_name: internal name of the field"""
        if field_name in self.ignore_fields:
            return False
        selected = self.list_fields.get(list_title)
        if not selected:
            return field_name in self.default_fields
        return field_name in selected
