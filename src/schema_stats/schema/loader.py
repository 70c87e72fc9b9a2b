"""Package schema loader.

Reads a schema from a local JSON/YAML file, or downloads a provider's
published ``schema.json`` from its repository.
"""

import json
import logging
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import httpx
import pydantic
import yaml

from schema_stats.config import DEFAULT_REPOSITORY, DEFAULT_TAG, DEFAULT_TIMEOUT
from schema_stats.errors import SchemaLoadError, SchemaNotFoundError
from schema_stats.schema.models import PackageSpec

logger = logging.getLogger(__name__)


def load_schema(file_path: Path) -> PackageSpec:
    """Parse a schema file into a PackageSpec. ``.json`` uses json, anything else YAML."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(str(file_path), e.strerror or str(e)) from e

    logger.info("Loading schema from %s", file_path)
    return parse_schema(text, source=str(file_path), as_json=file_path.suffix.lower() == ".json")


def parse_schema(text: str, source: str = "<string>", as_json: bool = True) -> PackageSpec:
    try:
        doc = json.loads(text) if as_json else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaLoadError(source, f"invalid document: {e}") from e

    if not isinstance(doc, dict):
        raise SchemaLoadError(source, "document is not a mapping")

    try:
        return PackageSpec.model_validate(doc)
    except pydantic.ValidationError as e:
        raise SchemaLoadError(source, f"invalid schema: {e.error_count()} validation errors") from e


def schema_path(provider: str) -> str:
    return f"provider/cmd/pulumi-resource-{provider}/schema.json"


def schema_url(provider: str, repository: str = DEFAULT_REPOSITORY, tag: str = DEFAULT_TAG) -> str:
    """URL of a provider's schema, e.g. .../pulumi-aws/master/provider/cmd/pulumi-resource-aws/schema.json."""
    return f"{repository.rstrip('/')}/pulumi-{provider}/{tag}/{schema_path(provider)}"


def download_schema(
    provider: str,
    repository: str = DEFAULT_REPOSITORY,
    tag: str = DEFAULT_TAG,
    timeout: float = DEFAULT_TIMEOUT,
) -> PackageSpec:
    """Fetch and parse a provider's schema.

    A ``file://`` repository is a local provider checkout: the schema is read
    from ``<root>/provider/cmd/pulumi-resource-<provider>/schema.json`` and
    ``tag`` is ignored.
    """
    parsed = urlparse(repository)
    if parsed.scheme == "file":
        local_path = resolve_repo_file(parsed.path or repository[len("file:"):], schema_path(provider))
        if not local_path.is_file():
            raise SchemaNotFoundError(str(local_path), "no such file in repository checkout")
        return load_schema(local_path)

    url = schema_url(provider, repository, tag)

    logger.info("Downloading schema from %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.HTTPError as e:
        raise SchemaLoadError(url, str(e)) from e

    if response.status_code == 404:
        raise SchemaNotFoundError(url)
    if response.status_code >= 400:
        raise SchemaLoadError(url, f"HTTP {response.status_code}")

    return parse_schema(response.text, source=url)


def resolve_repo_file(root: str, repository_path: str) -> Path:
    """Join a repository-relative path onto a local checkout without leaving it."""
    relative = PurePosixPath(repository_path)
    if relative.is_absolute():
        raise SchemaLoadError(repository_path, "absolute path not allowed")
    if str(relative) == ".":
        raise SchemaLoadError(repository_path, "empty path")

    root_path = Path(root).resolve()
    full_path = (root_path / relative).resolve()
    if not full_path.is_relative_to(root_path):
        raise SchemaLoadError(repository_path, "traversal outside repository root")
    return full_path
