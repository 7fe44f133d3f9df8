#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""Cli module contains entry point for the package.

Endpoint provides a meaningful piece of functionallity
related to extracting SharePoint list data with subcommands."""

import os
from argparse import ArgumentParser

from .cancellation import CancelledException
from .configuration import ConfigurationInvalidException, ConfigurationParsingException
from .engine import TableSyncException
from .gateway import GatewayException
from .log import setup_logging
from .sink import SinkWriteException
from .sync_command import SyncCommand
from .tables_command import TablesCommand

CMD_SYNC = 'sync'
CMD_TABLES = 'tables'

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130

commands = {
    CMD_SYNC: SyncCommand,
    CMD_TABLES: TablesCommand,
}


def _parser():
    """Get a configured parser for the module.

    This method will initialize argument parser with a list
    of avaliable commands and their options."""
    parser = ArgumentParser(prog="sharepoint_lists")
    parser.add_argument(
        "-c",
        '--config-file',
        type=str,
        metavar="CONFIGURATION_FILE_PATH",
        help="path to the configuration file"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)
    subparsers.add_parser(CMD_SYNC, help="stream every list item as a JSON line")
    subparsers.add_parser(CMD_TABLES, help="print the table schemas as JSON")

    return parser


def main(args=None):
    """Entry point for the connector."""
    if args is None:
        parser = _parser()
        args = parser.parse_args()

    if not args.config_file:
        args.config_file = os.path.join(os.path.expanduser('~'), '.local', 'config', 'sharepoint_lists_connector.yml')

    return run(args)


def run(args):
    """Run the command from the parsed args.

    This method takes already parsed and validated arguments
    and attempts to run the command with specified arguments.
    Returns the process exit code."""
    command = commands[args.cmd](args)
    try:
        command.config
    except (ConfigurationInvalidException, ConfigurationParsingException, OSError) as exception:
        setup_logging("sharepoint_lists").error(f"Unable to load the configuration: {exception}")
        return EXIT_ERROR

    try:
        command.execute()
    except CancelledException:
        command.logger.warning("Sync was cancelled")
        return EXIT_CANCELLED
    except (TableSyncException, GatewayException, SinkWriteException) as exception:
        command.logger.exception(f"Error while syncing the lists. Error {exception}")
        return EXIT_ERROR

    return EXIT_OK
