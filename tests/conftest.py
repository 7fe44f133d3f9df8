#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
import json
import logging

import pytest

from sharepoint_lists.cancellation import CancellationToken
from sharepoint_lists.configuration import Configuration
from sharepoint_lists.gateway import FieldInfo, ListNotFoundException, PageCursor, SharePointGateway
from sharepoint_lists.sink import Sink

CREDENTIALS = {
    "site_url": "https://contoso.sharepoint.com/sites/team",
    "client_id": "client-id",
    "client_secret": "client-secret",
}


class FakePage(PageCursor):
    """Serves pre-recorded pages. A page is a list of item dicts, or raw bytes."""

    def __init__(self, pages, index=0, missing_from=None):
        self.pages = pages
        self.index = index
        self.missing_from = missing_from

    def items_json(self):
        page = self.pages[self.index]
        if isinstance(page, bytes):
            return page
        return json.dumps(page).encode("utf-8")

    def has_next_page(self):
        return self.index + 1 < len(self.pages)

    def next(self):
        if self.missing_from is not None and self.index + 1 >= self.missing_from:
            raise ListNotFoundException("list is gone")
        return FakePage(self.pages, self.index + 1, self.missing_from)


class FakeGateway(SharePointGateway):
    def __init__(self, lists=None, fields=None, items=None, missing_from=None, failures=None):
        self.lists = lists or []
        self.fields = fields or {}
        self.items = items or {}
        self.missing_from = missing_from or {}
        self.failures = failures or {}
        self.fields_calls = []

    def list_all(self):
        return [{"Title": title} for title in self.lists]

    def list_fields(self, title):
        self.fields_calls.append(title)
        if title not in self.fields:
            raise ListNotFoundException(f"{title} not found")
        return self.fields[title]

    def list_items_paged(self, title):
        if title in self.failures:
            raise self.failures[title]
        if title not in self.items:
            raise ListNotFoundException(f"{title} not found")
        return FakePage(self.items[title], missing_from=self.missing_from.get(title))


class RecordingSink(Sink):
    """Keeps every row it receives. Cancels the token once cancel_after rows were accepted."""

    def __init__(self, cancel_after=None):
        self.rows = []
        self.cancel_after = cancel_after

    def send(self, table_name, row, cancellation):
        cancellation.raise_if_cancelled()
        self.rows.append((table_name, row))
        if self.cancel_after is not None and len(self.rows) >= self.cancel_after:
            cancellation.cancel()


def field(internal_name, type_as_string, title=None, description=""):
    return FieldInfo(internal_name, type_as_string, title=title or internal_name, description=description)


@pytest.fixture
def make_config():
    def _make_config(**settings):
        return Configuration.from_dict({**CREDENTIALS, **settings})
    return _make_config


@pytest.fixture
def logger():
    return logging.getLogger("tests.sharepoint_lists")


@pytest.fixture
def gateway_class():
    return FakeGateway


@pytest.fixture
def sink_class():
    return RecordingSink


@pytest.fixture
def make_field():
    return field


@pytest.fixture
def cancellation():
    return CancellationToken()


@pytest.fixture
def my_tasks_gateway():
    """The 'My Tasks' list: Id, Title and DueDate fields and a single item."""
    return FakeGateway(
        lists=["My Tasks"],
        fields={
            "My Tasks": [
                field("Id", "Counter"),
                field("Title", "Text"),
                field("DueDate", "DateTime"),
            ]
        },
        items={
            "My Tasks": [[{"Id": 7, "Title": "a", "DueDate": "2024-01-01T00:00:00Z"}]]
        },
    )
