"""Error types for schema loading and statistics."""


class SchemaStatsError(Exception):
    """Base error for schema-stats."""

    pass


class MalformedReference(SchemaStatsError):
    """A type reference does not resolve to any entry in the schema's types."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Type reference does not resolve: {token}")
        self.token = token


class MalformedToken(SchemaStatsError):
    """A resource token is not of the form package:module:Name."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Malformed token: {token!r}")
        self.token = token


class ConsumerFailure(SchemaStatsError):
    """A visitor callback failed; the walk was aborted."""

    def __init__(self, callback: str, token: str) -> None:
        super().__init__(f"{callback} failed for {token!r}")
        self.callback = callback
        self.token = token


class AggregatorStateError(SchemaStatsError):
    """An aggregator was used out of order (e.g. summarized twice)."""

    pass


class SchemaLoadError(SchemaStatsError):
    """A schema could not be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Cannot load schema from {source}: {reason}")
        self.source = source
        self.reason = reason


class SchemaNotFoundError(SchemaLoadError):
    """The schema URL answered 404, or the repository checkout has no schema file."""

    def __init__(self, url: str, reason: str = "received a 404 response") -> None:
        super().__init__(url, reason)
        self.url = url
