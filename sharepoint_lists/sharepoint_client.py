#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""sharepoint_client allows to call Sharepoint or make queries for it.

Requests are authenticated with an app-only token obtained from the
Azure ACS endpoint using the client id and secret of a SharePoint add-in."""

import json
import re
import time
from decimal import Decimal
from urllib.parse import urlparse

import requests
from requests.exceptions import RequestException

from .gateway import FieldInfo, GatewayException, ListNotFoundException, PageCursor, SharePointGateway
from .utils import encode

ACS_TOKEN_URL = "https://accounts.accesscontrol.windows.net/{realm}/tokens/OAuth/2"
SHAREPOINT_PRINCIPAL = "00000003-0000-0ff1-ce00-000000000000"
TOKEN_EXPIRY_MARGIN = 60

REQUEST_HEADERS = {
    "accept": "application/json;odata=verbose",
    "content-type": "application/json;odata=verbose"
}

REALM_PATTERN = re.compile(r'realm="([^"]+)"', re.IGNORECASE)


def get_results(response_data):
    """Returns the results of an odata=verbose collection response"""
    return response_data.get("d", {}).get("results", [])


def get_next_link(response_data):
    """Returns the url of the next page of an odata=verbose collection response, if any"""
    return response_data.get("d", {}).get("__next")


def clean_item(item):
    """Removes odata bookkeeping from a list item.

    Drops __metadata and the navigation properties that were not expanded,
    which SharePoint returns as {"__deferred": {...}} objects."""
    return {
        key: value
        for key, value in item.items()
        if key != "__metadata" and not (isinstance(value, dict) and set(value) == {"__deferred"})
    }


def dump_json(value):
    """Serializes decoded JSON back to text, writing Decimal numbers with their original digits"""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return "{" + ", ".join(f"{json.dumps(key)}: {dump_json(item)}" for key, item in value.items()) + "}"
    if isinstance(value, list):
        return "[" + ", ".join(dump_json(item) for item in value) + "]"
    return json.dumps(value)


class ItemsPage(PageCursor):
    """A page of list items returned by the SharePoint REST API."""

    def __init__(self, client, title, response_data):
        self.client = client
        self.title = title
        self.items = [clean_item(item) for item in get_results(response_data)]
        self.next_url = get_next_link(response_data)

    def items_json(self):
        return dump_json(self.items).encode("utf-8")

    def has_next_page(self):
        return bool(self.next_url)

    def next(self):
        if not self.next_url:
            raise GatewayException(f"List {self.title} has no next page")
        return ItemsPage(self.client, self.title, self.client.get(self.next_url))


class SharePoint(SharePointGateway):
    """This class encapsulates all module logic."""

    def __init__(self, config, logger, session=None):
        self.logger = logger
        self.site_url = config.get_value("site_url").rstrip("/")
        self.client_id = config.get_value("client_id")
        self.client_secret = config.get_value("client_secret")
        self.realm = config.get_value("realm")
        self.retry_count = int(config.get_value("retry_count"))
        self.timeout = config.get_value("request_timeout")
        self.page_size = config.get_value("page_size")
        self.session = session or requests.Session()

        self._access_token = None
        self._token_expiry = 0

    def discover_realm(self):
        """Reads the tenant realm from the WWW-Authenticate header of an anonymous request"""
        url = f"{self.site_url}/_vti_bin/client.svc"
        try:
            response = self.session.get(url, headers={"Authorization": "Bearer"}, timeout=self.timeout)
        except RequestException as exception:
            raise GatewayException(f"Error while discovering the realm, url: {url}. Error: {exception}", url=url) from exception
        match = REALM_PATTERN.search(response.headers.get("WWW-Authenticate", ""))
        if not match:
            raise GatewayException(f"Unable to discover the realm of {self.site_url}", url=url, status_code=response.status_code)
        self.logger.debug("Discovered realm %s for site %s" % (match.group(1), self.site_url))
        return match.group(1)

    def access_token(self):
        """Returns a cached app-only access token, requesting a new one when it is about to expire"""
        if self._access_token and time.monotonic() < self._token_expiry:
            return self._access_token

        if not self.realm:
            self.realm = self.discover_realm()
        host = urlparse(self.site_url).netloc
        url = ACS_TOKEN_URL.format(realm=self.realm)
        data = {
            "grant_type": "client_credentials",
            "client_id": f"{self.client_id}@{self.realm}",
            "client_secret": self.client_secret,
            "resource": f"{SHAREPOINT_PRINCIPAL}/{host}@{self.realm}",
        }
        try:
            response = self.session.post(url, data=data, timeout=self.timeout)
        except RequestException as exception:
            raise GatewayException(f"Error while requesting an access token. Error: {exception}", url=url) from exception
        if not response.ok:
            raise GatewayException(
                f"Error while requesting an access token: {response.status_code} {response.reason}",
                url=url,
                status_code=response.status_code,
            )

        token = response.json()
        self._access_token = token["access_token"]
        self._token_expiry = time.monotonic() + int(token.get("expires_in", 3600)) - TOKEN_EXPIRY_MARGIN
        return self._access_token

    def get(self, url):
        """Invokes a GET call to the Sharepoint server, retrying server errors
        :param url: absolute url of the resource
        Returns:
            decoded JSON response
        """
        retry = 0
        while True:
            error = None
            try:
                headers = dict(REQUEST_HEADERS, authorization=f"Bearer {self.access_token()}")
                response = self.session.get(url, headers=headers, timeout=self.timeout)
            except RequestException as exception:
                error = GatewayException(f"Error while fetching from the sharepoint, url: {url}. Error: {exception}", url=url)
            else:
                if response.ok:
                    try:
                        return json.loads(response.content, parse_float=Decimal)
                    except ValueError as exception:
                        raise GatewayException(f"Invalid JSON received from the sharepoint, url: {url}", url=url) from exception
                if response.status_code == 404:
                    raise ListNotFoundException(f"Not found: {url}", url=url, status_code=404)
                error = GatewayException(
                    f"Error: {response.reason}. Error while fetching from the sharepoint, url: {url}.",
                    url=url,
                    status_code=response.status_code,
                )
                if response.status_code == 401:
                    self._access_token = None
                elif response.status_code < 500 and response.status_code != 429:
                    raise error

            if retry >= self.retry_count:
                raise error
            self.logger.error(
                f"Error while fetching from the sharepoint, url: {url}. Retry Count: {retry}. Error: {error}"
            )
            time.sleep(2 ** retry)
            retry += 1

    def get_all(self, url):
        """Follows __next links and returns the results of every page"""
        results = []
        while url:
            response_data = self.get(url)
            results.extend(get_results(response_data))
            url = get_next_link(response_data)
        return results

    def list_url(self, title):
        return f"{self.site_url}/_api/web/lists/GetByTitle('{encode(title)}')"

    def list_all(self):
        self.logger.info("Fetching the lists of site %s" % self.site_url)
        results = self.get_all(f"{self.site_url}/_api/web/lists?$select=Title")
        return [{"Title": result.get("Title")} for result in results]

    def list_fields(self, title):
        self.logger.info("Fetching the fields of list %s" % title)
        return [FieldInfo.from_dict(result) for result in self.get_all(f"{self.list_url(title)}/fields")]

    def list_items_paged(self, title):
        url = f"{self.list_url(title)}/items?$top={self.page_size}"
        return ItemsPage(self, title, self.get(url))
