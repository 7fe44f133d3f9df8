#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""This module allows to run a sync of SharePoint lists.

It will read every configured, or discovered, list of the site and
write each list item as a JSON line to the configured output."""
import signal
import sys
import threading

from .base_command import BaseCommand
from .cancellation import CancellationToken, CancelledException
from .connector_queue import ConnectorQueue
from .sink import JsonLinesWriter, SinkWriteException


class SyncCommand(BaseCommand):
    """This class starts execution of the sync feature."""

    def __init__(self, args):
        super().__init__(args)

        self.cancellation = CancellationToken()

    def open_output(self):
        output_path = self.config.get_value("output_path")
        if output_path == "-":
            return sys.stdout
        try:
            return open(output_path, "w", encoding="utf-8")
        except OSError as exception:
            raise SinkWriteException(f"Unable to open the output {output_path}: {exception}") from exception

    def handle_signal(self, signum, frame):
        self.logger.warning(f"Received signal {signum}, cancelling the sync")
        self.cancellation.cancel()

    def install_signal_handlers(self):
        """Cancel the sync on SIGINT and SIGTERM. Returns the handlers that were replaced."""
        if threading.current_thread() is not threading.main_thread():
            return {}
        previous = {}
        for signum in (signal.SIGINT, signal.SIGTERM):
            previous[signum] = signal.signal(signum, self.handle_signal)
        return previous

    @staticmethod
    def restore_signal_handlers(previous):
        for signum, handler in previous.items():
            signal.signal(signum, handler)

    def start_producer(self, queue):
        """This method runs the engine, which is responsible for fetching rows from
        the SharePoint and pushing them in the shared queue
        :param queue: Shared queue the rows are sent to
        """
        self.logger.debug("Starting the sync..")
        try:
            metrics = self.engine.sync(queue, self.cancellation)
        finally:
            queue.end_signal()
        for table_name, table_metrics in metrics.items():
            self.logger.info(
                "Table %s: %s resources, %s errors" % (table_name, table_metrics.resources, table_metrics.errors),
                extra={"table": table_name, **table_metrics.to_dict()},
            )
        return metrics

    def start_consumer(self, queue, stream, tables):
        """This method starts the thread responsible for writing rows to the output
        :param queue: Shared queue to fetch the rows from
        :param stream: writable text stream
        :param tables: list of (TableSchema, TableMeta) pairs being synced
        """
        schemas = {table.name: table for table, _ in tables}
        writer = JsonLinesWriter(queue, stream, schemas, self.logger, self.cancellation)
        thread = threading.Thread(target=writer.perform_sync, name="sharepoint-lists-writer", daemon=True)
        thread.start()
        return thread, writer

    def execute(self):
        """This function execute the start function."""
        queue = ConnectorQueue(self.logger, maxsize=self.config.get_value("queue_size"))

        tables = self.engine.build_tables()
        stream = self.open_output()
        previous_handlers = self.install_signal_handlers()
        try:
            consumer, writer = self.start_consumer(queue, stream, tables)
            try:
                metrics = self.start_producer(queue)
            except CancelledException:
                if writer.error:
                    raise SinkWriteException(f"Unable to write rows: {writer.error}") from writer.error
                raise
            finally:
                consumer.join()
            if writer.error:
                raise SinkWriteException(f"Unable to write rows: {writer.error}") from writer.error
            return metrics
        finally:
            self.restore_signal_handlers(previous_handlers)
            if stream is not sys.stdout:
                stream.close()
