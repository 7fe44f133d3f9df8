#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""This module provides the tooling to extract list data
from a SharePoint site as a stream of typed table rows."""
__version__ = "0.1.0"
