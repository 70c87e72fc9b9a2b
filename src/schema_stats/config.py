"""Defaults for schema-stats.

The CLI lets the environment override these through the ``*_ENVVAR`` names.
"""

TYPE_PREFIX = "#/types/"

DEFAULT_REPOSITORY = "https://raw.githubusercontent.com/pulumi"
DEFAULT_TAG = "master"
DEFAULT_TIMEOUT = 30.0

REPOSITORY_ENVVAR = "SCHEMA_STATS_REPOSITORY"
TAG_ENVVAR = "SCHEMA_STATS_TAG"
TIMEOUT_ENVVAR = "SCHEMA_STATS_TIMEOUT"
