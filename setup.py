#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#

import sys
from setuptools import setup, find_packages

if sys.version_info < (3, 8):
    raise ValueError("Requires Python 3.8 or superior")

from sharepoint_lists import __version__  # NOQA

install_requires = [
    "requests",
    "pyyaml",
    "cerberus",
    "ecs_logging",
]

tests_require = [
    "pytest",
    "pytest-cov",
]

description = ""

with open("README.rst") as f:
    description += f.read() + "\n\n"


classifiers = [
    "Programming Language :: Python",
    "Development Status :: 4 - Beta",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.8",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
]


setup(
    name="sharepoint-lists-connector",
    version=__version__,
    packages=find_packages(exclude=["tests"]),
    long_description=description.strip(),
    description="Streams SharePoint list items as typed table rows",
    include_package_data=True,
    zip_safe=False,
    classifiers=classifiers,
    install_requires=install_requires,
    tests_require=tests_require,
    extras_require={"tests": tests_require},
    data_files=[("config", ["sharepoint_lists_connector.yml"])],
    entry_points="""
      [console_scripts]
      sharepoint_lists = sharepoint_lists.cli:main
      """,
)
