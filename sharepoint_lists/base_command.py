#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""Module contains a base command interface.

Connector can run multiple commands such as sync, tables,
etc. This module provides convenience interface defining the shared
objects and methods that will can be used by commands."""

from functools import cached_property

from .configuration import Configuration
from .engine import SyncEngine
from .log import setup_logging
from .sharepoint_client import SharePoint


class BaseCommand:
    """Base interface for all module commands.

    Inherit from it and implement 'execute' method, then add
    code to cli.py to register this command."""
    def __init__(self, args):
        self.args = args

    def execute(self):
        """Run the command.

        This method is overriden by actual commands with logic
        that is specific to each command implementing it."""
        raise NotImplementedError

    @cached_property
    def logger(self):
        """Get the logger instance for the running command.

        log level and format will be determined by the configuration
        settings log_level and log_format.
        """
        return setup_logging(
            "sharepoint_lists",
            self.config.get_value("log_level"),
            self.config.get_value("log_format"),
        )

    @cached_property
    def config(self):
        """Get the configuration for the connector for the running command."""
        file_name = self.args.config_file
        return Configuration.from_file(file_name)

    @cached_property
    def sharepoint_client(self):
        """Get the sharepoint client instance for the running command."""
        return SharePoint(self.config, self.logger)

    @cached_property
    def engine(self):
        """Get the sync engine reading from the sharepoint client."""
        return SyncEngine(self.config, self.sharepoint_client, self.logger)
