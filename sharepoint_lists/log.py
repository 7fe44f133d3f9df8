#
# Copyright Elasticsearch B.V. and/or licensed to Elasticsearch B.V. under one
# or more contributor license agreements. Licensed under the Elastic License 2.0;
# you may not use this file except in compliance with the Elastic License 2.0.
#
"""This module contains logging-related logic."""

import logging

import ecs_logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_name, log_level="INFO", log_format="plain"):
    """Setup logger.

    :param log_name: name for logger
    :param log_level: log level, a string
    :param log_format: 'plain' for human readable lines, 'ecs' for ECS-compatible JSON
    :return: a logger object"""
    logger = logging.getLogger(log_name)
    logger.propagate = False
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        if log_format == "ecs":
            handler.setFormatter(ecs_logging.StdlibFormatter())
        else:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(log_level)
        logger.addHandler(handler)

    return logger
