#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""engine module drives a sync of SharePoint lists into a sink.

It resolves which lists to read, builds a table for each of them and
then streams the tables one after the other. The first table that
fails stops the whole run."""

from .cancellation import CancelledException
from .extractor import Extractor, TableMetrics
from .normalizer import normalize
from .schema_builder import SchemaBuilder
from .selector import FieldSelector


class TableSyncException(Exception):
    """Exception raised when a table could not be synced.

    Attributes:
        table -- name of the table that failed
        cause -- the underlying exception
    """

    def __init__(self, table, cause):
        super().__init__(f"syncing table {table}: {cause}")

        self.table = table
        self.cause = cause


def unique_list_titles(titles, logger):
    """Drops titles whose normalized name was already taken by an earlier title
    :param titles: list titles in discovery order
    :param logger: logger used to report dropped titles"""
    accepted = []
    normalized_names = {}
    for title in titles:
        name = normalize(title)
        if name in normalized_names:
            logger.warning(
                "List %r has been normalized to %r, but list %r already uses that name. Skipping %r"
                % (title, name, normalized_names[name], title)
            )
            continue
        normalized_names[name] = title
        accepted.append(title)
    return accepted


class SyncEngine:
    """This class orchestrates schema discovery and extraction for all lists."""

    def __init__(self, config, gateway, logger):
        self.config = config
        self.gateway = gateway
        self.logger = logger
        self.schema_builder = SchemaBuilder(config, gateway, FieldSelector(config), logger)
        self.extractor = Extractor(gateway, logger)
        self.tables = None
        self.metrics = {}

    def resolve_lists(self):
        """Returns the titles of the lists to sync.

        Lists from the configuration are used verbatim, otherwise every
        list of the site is discovered."""
        lists = self.config.get_value("lists")
        if lists:
            return list(lists)

        self.logger.info("No lists configured, discovering all the lists of the site")
        titles = []
        for data in self.gateway.list_all():
            title = data.get("Title")
            if not title:
                self.logger.warning("Skipping a discovered list without a title: %r" % data)
                continue
            titles.append(title)
        return unique_list_titles(titles, self.logger)

    def build_tables(self):
        """Builds (TableSchema, TableMeta) pairs for every resolved list.

        Lists that no longer exist are skipped."""
        self.tables = []
        for title in self.resolve_lists():
            result = self.schema_builder.build(title)
            if result is None:
                continue
            self.tables.append(result)
        self.logger.info("Found %s tables to sync" % len(self.tables))
        return self.tables

    def sync(self, sink, cancellation):
        """Streams every table into the sink.

        build_tables is called first if it was not run yet.
        :param sink: Sink receiving the rows
        :param cancellation: CancellationToken for the run
        Returns:
            dictionary of table name to TableMetrics
        """
        if self.tables is None:
            self.build_tables()

        self.metrics = {table.name: TableMetrics() for table, _ in self.tables}
        for table, meta in self.tables:
            metrics = self.metrics[table.name]
            try:
                self.extractor.extract(table, meta, cancellation, sink, metrics)
            except CancelledException:
                self.logger.info("Sync cancelled while syncing table %s" % table.name, extra={"table": table.name})
                raise
            except Exception as exception:
                metrics.errors += 1
                raise TableSyncException(table.name, exception) from exception
        return self.metrics
