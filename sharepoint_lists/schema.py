#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""schema module contains Connector configuration file schema."""

DEFAULT_FIELDS = ["Id", "Created", "Modified", "Title", "AuthorId", "EditorId", "FSObjType"]
IGNORE_FIELDS = ["__metadata"]
FIELD_OVERRIDES = {
    "AuthorId": "Integer",
    "EditorId": "Integer",
    "Id": "Integer",
    "FSObjType": "Integer",
}

STRING_LIST = {
    'type': 'list',
    'schema': {'type': 'string'}
}

schema = {
    'site_url': {
        'required': True,
        'type': 'string',
        'empty': False
    },
    'client_id': {
        'required': True,
        'type': 'string',
        'empty': False
    },
    'client_secret': {
        'required': True,
        'type': 'string',
        'empty': False
    },
    'realm': {
        'required': False,
        'type': 'string',
        'nullable': True
    },
    'lists': {
        **STRING_LIST,
        'required': False,
        'default_setter': lambda document: []
    },
    'list_fields': {
        'required': False,
        'type': 'dict',
        'keysrules': {'type': 'string'},
        'valuesrules': {**STRING_LIST, 'nullable': True},
        'default_setter': lambda document: {}
    },
    'default_fields': {
        **STRING_LIST,
        'required': False,
        'default_setter': lambda document: list(DEFAULT_FIELDS)
    },
    'ignore_fields': {
        **STRING_LIST,
        'required': False,
        'default_setter': lambda document: list(IGNORE_FIELDS)
    },
    'field_overrides': {
        'required': False,
        'type': 'dict',
        'keysrules': {'type': 'string'},
        'valuesrules': {'type': 'string'},
        'default_setter': lambda document: dict(FIELD_OVERRIDES)
    },
    'pk_column': {
        'required': False,
        'type': 'string',
        'default': 'Id'
    },
    'page_size': {
        'required': False,
        'type': 'integer',
        'default': 1000,
        'min': 1,
        'max': 5000
    },
    'retry_count': {
        'required': False,
        'type': 'integer',
        'default': 3,
        'min': 0
    },
    'request_timeout': {
        'required': False,
        'type': 'number',
        'default': 60,
        'min': 1
    },
    'queue_size': {
        'required': False,
        'type': 'integer',
        'default': 1000,
        'min': 1
    },
    'output_path': {
        'required': False,
        'type': 'string',
        'default': '-'
    },
    'log_level': {
        'required': False,
        'type': 'string',
        'default': 'INFO',
        'allowed': ['DEBUG', 'INFO', 'WARN', 'ERROR']
    },
    'log_format': {
        'required': False,
        'type': 'string',
        'default': 'plain',
        'allowed': ['plain', 'ecs']
    }
}
