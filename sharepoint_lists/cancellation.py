#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""cancellation module allows to stop a running sync from another thread."""

import threading


class CancelledException(Exception):
    """Exception raised when a sync was cancelled before it finished."""

    def __init__(self, message="Sync was cancelled"):
        super().__init__(message)


class CancellationToken:
    """Thread-safe flag checked by the connector at every blocking point."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()

    def raise_if_cancelled(self):
        """Raises CancelledException if cancel() was called."""
        if self._event.is_set():
            raise CancelledException()

    def wait(self, timeout=None):
        """Blocks until the token is cancelled or the timeout expires.

        Returns True if the token was cancelled."""
        return self._event.wait(timeout)
