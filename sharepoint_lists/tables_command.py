#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""This module allows to print the tables the connector would emit.

It reads the field definitions of every list and prints the resulting
table schemas and column maps, without fetching any list item."""
import json
import sys

from .base_command import BaseCommand


class TablesCommand(BaseCommand):
    """This class prints the table schemas as JSON."""

    def execute(self):
        tables = [
            {**table.to_dict(), "sharepoint": meta.to_dict()}
            for table, meta in self.engine.build_tables()
        ]
        json.dump(tables, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return tables
