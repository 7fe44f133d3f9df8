#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""Module contains the interface the connector uses to read from SharePoint.

The engine only talks to SharePoint through SharePointGateway, so any
transport (REST, a fake for tests, ...) can be plugged in by implementing
the methods below."""


class GatewayException(Exception):
    """Exception raised when SharePoint could not be queried.

    Attributes:
        url -- url of the failed request, if any
        status_code -- HTTP status code of the failed request, if any
    """

    def __init__(self, message, url=None, status_code=None):
        super().__init__(message)

        self.url = url
        self.status_code = status_code


class ListNotFoundException(GatewayException):
    """Exception raised when the requested list does not exist on the site."""


class FieldInfo:
    """Field definition of a SharePoint list."""

    def __init__(self, internal_name, type_as_string, title="", description="", field_type_kind=0, field_id=""):
        self.internal_name = internal_name
        self.type_as_string = type_as_string
        self.title = title
        self.description = description
        self.field_type_kind = field_type_kind
        self.field_id = field_id

    @classmethod
    def from_dict(cls, data):
        """Builds a FieldInfo from a field object returned by the SharePoint API
        :param data: dictionary with InternalName, TypeAsString, Title, Description, FieldTypeKind and Id"""
        return cls(
            internal_name=data.get("InternalName"),
            type_as_string=data.get("TypeAsString"),
            title=data.get("Title") or "",
            description=data.get("Description") or "",
            field_type_kind=data.get("FieldTypeKind") or 0,
            field_id=data.get("Id") or data.get("ID") or "",
        )

    def __repr__(self):
        return f"FieldInfo({self.internal_name!r}, {self.type_as_string!r})"


class PageCursor:
    """One page of list items and the way to the next one."""

    def items_json(self):
        """Returns the items of the page as a JSON array of objects, in bytes."""
        raise NotImplementedError

    def has_next_page(self):
        raise NotImplementedError

    def next(self):
        """Fetches the next page.

        Raises ListNotFoundException if the list is gone."""
        raise NotImplementedError


class SharePointGateway:
    """Base interface for SharePoint access.

    Every method raises ListNotFoundException when the list does not
    exist and GatewayException for any other failure."""

    def list_all(self):
        """Returns a list of {"Title": ...} dictionaries, one per list on the site."""
        raise NotImplementedError

    def list_fields(self, title):
        """Returns the FieldInfo objects of a list, in SharePoint order."""
        raise NotImplementedError

    def list_items_paged(self, title):
        """Returns a PageCursor positioned on the first page of list items."""
        raise NotImplementedError
