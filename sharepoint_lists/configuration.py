#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""Configuration module allows manipulations with application configuration.

This module can be used to read and validate configuration file that defines
the settings of the SharePoint lists connector."""

import yaml
from yaml.error import YAMLError
from cerberus import Validator

from .normalizer import normalize
from .schema import schema


class ConfigurationInvalidException(Exception):
    """Exception raised when configuration was invalid.

    Attributes:
        errors - errors found in the configuration
        message -- explanation of the error
    """

    def __init__(self, errors):
        super().__init__(f"Provided configuration was invalid. Errors: {errors}.")

        self.errors = errors


class ConfigurationParsingException(Exception):
    """Exception raised when configuration could not be parsed.

    Attributes:
        file_name - name of the file that could not be parsed
    """

    def __init__(self, file_name, inner_exception):
        super().__init__(f"Failed to parse configuration file {file_name}.")

        self.file_name = file_name
        self.inner_exception = inner_exception


class Configuration:
    """Configuration class is responsible for parsing, validating and accessing
    configuration options from connector configuration file."""

    def __init__(self, configurations, file_name=None):
        self.file_name = file_name
        self._configurations = self.validate(configurations or {})

    @classmethod
    def from_file(cls, file_name):
        """Reads and validates a YAML configuration file
        :param file_name: path of the configuration file"""
        try:
            with open(file_name, encoding="utf-8") as stream:
                configurations = yaml.safe_load(stream)
        except YAMLError as exception:
            raise ConfigurationParsingException(file_name, exception)
        return cls(configurations, file_name=file_name)

    @classmethod
    def from_dict(cls, configurations):
        return cls(dict(configurations))

    def validate(self, configurations):
        """Validates each property of the configuration and fills in the defaults.

        Schema errors and connector specific errors are reported together."""

        if not isinstance(configurations, dict):
            raise ConfigurationInvalidException({"document": ["configuration must be a mapping"]})

        validator = Validator(schema)
        validator.validate(configurations, schema)
        errors = dict(validator.errors)
        document = validator.document
        if not errors:
            self._validate_credentials(document, errors)
            self._validate_lists(document, errors)
        if errors:
            raise ConfigurationInvalidException(errors)

        # the item identifier fields are always read as integers
        for name in {"Id", document["pk_column"]}:
            document["field_overrides"][name] = "Integer"
        return document

    @staticmethod
    def _validate_credentials(document, errors):
        for key in ["site_url", "client_id", "client_secret"]:
            if not document[key].strip():
                errors.setdefault(key, []).append(f"{key} is required")

    @staticmethod
    def _validate_lists(document, errors):
        titles = document["lists"]
        normalized_titles = {}
        for title in titles:
            name = normalize(title)
            if name in normalized_titles:
                errors.setdefault("lists", []).append(
                    f"found duplicate normalized list name: {normalized_titles[name]!r} and {title!r} "
                    f"are both normalized to {name!r}"
                )
                continue
            normalized_titles[name] = title

        if titles:
            for title in document["list_fields"]:
                if title not in titles:
                    errors.setdefault("list_fields", []).append(
                        f"list_fields references {title!r} which is not in lists"
                    )

    def get_value(self, key):
        """Returns a configuration value that matches the key argument"""

        return self._configurations.get(key)
