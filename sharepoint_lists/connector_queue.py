#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
import queue

from .sink import ROW, SIGNAL_CLOSE, Sink

PUT_POLL_INTERVAL = 0.1


class ConnectorQueue(queue.Queue, Sink):
    """Bounded queue shared by the engine and the row writer"""

    def __init__(self, logger, maxsize=1000):
        self.logger = logger
        super().__init__(maxsize=maxsize)

    def end_signal(self):
        """Send an terminate signal to indicate the queue can be closed"""

        signal_close = {"type": SIGNAL_CLOSE}
        self.put(signal_close)

    def send(self, table_name, row, cancellation):
        """Put a row in the queue, waiting for free space while the sync is not cancelled

        :param table_name: name of the table the row belongs to
        :param row: list of values aligned with the table columns
        :param cancellation: CancellationToken of the run
        """
        message = {"type": ROW, "table": table_name, "data": row}
        while True:
            cancellation.raise_if_cancelled()
            try:
                self.put(message, timeout=PUT_POLL_INTERVAL)
                return
            except queue.Full:
                continue
