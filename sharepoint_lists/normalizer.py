#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""normalizer module turns SharePoint titles and field names into identifiers."""

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_DIGIT_BOUNDARY = re.compile(r"([a-z])([0-9])")


def to_snake(name):
    """Converts a CamelCase or mixedCase name to snake_case
    :param name: name to be converted
    Returns:
        snake cased name, lower-cased"""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _CASE_BOUNDARY.sub(r"\1_\2", name)
    # digit boundaries are matched on the lowered name
    return _DIGIT_BOUNDARY.sub(r"\1_\2", name.lower())


def normalize(name):
    """Returns the table or column identifier for a list title or field name.

    'My Tasks' becomes 'my_tasks', 'FSObjType' becomes 'fs_obj_type'.
    Applying it twice gives the same result as applying it once."""
    return to_snake(name).replace(" ", "_").replace("-", "_")
