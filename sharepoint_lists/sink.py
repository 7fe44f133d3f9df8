#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""sink module defines where extracted rows go.

The engine hands rows to a Sink one by one. JsonLinesWriter is the
consumer side used by the sync command: it pulls rows from the shared
queue and writes them as JSON lines."""
import json
import threading
from decimal import Decimal

ROW = "row"
SIGNAL_CLOSE = "signal_close"


class Sink:
    """Base interface for row consumers."""

    def send(self, table_name, row, cancellation):
        """Accepts one row of a table.

        May block, and raises CancelledException if the cancellation
        token is triggered before the row was accepted.
        :param table_name: name of the table the row belongs to
        :param row: list of values aligned with the table columns
        :param cancellation: CancellationToken of the run"""
        raise NotImplementedError


def _json_default(value):
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class SinkWriteException(Exception):
    """Exception raised when rows could not be written to the output."""


class JsonLinesWriter:
    """This class writes rows taken from a ConnectorQueue to a text stream."""

    def __init__(self, queue, stream, tables, logger, cancellation=None):
        """:param queue: ConnectorQueue filled by the engine
        :param stream: writable text stream
        :param tables: dictionary of table name to TableSchema
        :param logger: logger of the running command
        :param cancellation: CancellationToken cancelled when a row cannot be written"""
        self.queue = queue
        self.stream = stream
        self.tables = tables
        self.logger = logger
        self.cancellation = cancellation
        self.rows_written = 0
        self.error = None

    def write_row(self, table_name, row):
        columns = self.tables[table_name].column_names
        record = {"table": table_name, "row": dict(zip(columns, row))}
        self.stream.write(json.dumps(record, default=_json_default) + "\n")
        self.rows_written += 1

    def cancel(self):
        if self.cancellation:
            self.cancellation.cancel()

    def perform_sync(self):
        """Pull rows from the queue and write them until the close signal is received.

        After a failed write the remaining rows are drained and dropped, so the
        producer never blocks on a full queue. The run is cancelled whenever
        the loop stops before the close signal."""
        closed = False
        try:
            while True:
                message = self.queue.get()
                if message.get("type") == SIGNAL_CLOSE:
                    self.logger.info(
                        f"Found an end signal in the queue. Closing Thread ID {threading.get_ident()}"
                    )
                    closed = True
                    break
                if self.error:
                    continue
                try:
                    self.write_row(message["table"], message["data"])
                except Exception as exception:
                    self.logger.exception(f"Error while writing rows to the output. Error {exception}")
                    self.error = exception
                    self.cancel()
        finally:
            if not closed:
                self.cancel()
        if not self.error:
            try:
                self.stream.flush()
            except OSError as exception:
                self.logger.exception(f"Error while flushing the output. Error {exception}")
                self.error = exception
        self.logger.info(f"Successfully wrote {self.rows_written} rows")
