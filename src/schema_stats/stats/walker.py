"""Single-pass traversal of a package schema.

``walk`` visits every resource and function in token order, and every
property they own with the direction implied by its owner. Type references
carried by each property are recorded in a ``KindTracker`` as it goes.
"""

import logging
from abc import ABC, abstractmethod

from schema_stats.errors import ConsumerFailure, MalformedReference
from schema_stats.schema.models import (
    ComplexTypeSpec,
    FunctionSpec,
    PackageSpec,
    PropertySpec,
    ResourceSpec,
)
from schema_stats.stats.kinds import KindTracker, PropKind, strip_prefix

logger = logging.getLogger(__name__)


class SchemaVisitor(ABC):
    """Receives a callback for every entity the walk encounters."""

    @abstractmethod
    def visit_resource(self, token: str, resource: ResourceSpec) -> None: ...

    @abstractmethod
    def visit_function(self, token: str, function: FunctionSpec) -> None: ...

    @abstractmethod
    def visit_type(self, token: str, type_spec: ComplexTypeSpec, kind: PropKind) -> None: ...

    @abstractmethod
    def visit_property(self, name: str, prop: PropertySpec, kind: PropKind) -> None: ...


class NullVisitor(SchemaVisitor):
    """Ignores every callback; useful when only the kind side-table is wanted."""

    def visit_resource(self, token, resource):
        pass

    def visit_function(self, token, function):
        pass

    def visit_type(self, token, type_spec, kind):
        pass

    def visit_property(self, name, prop, kind):
        pass


def walk(schema: PackageSpec, visitor: SchemaVisitor, tracker: KindTracker | None = None) -> KindTracker:
    """Visit all resources, functions and their properties; return the kind tracker.

    A visitor exception aborts the walk and is raised as ``ConsumerFailure``.
    """
    if tracker is None:
        tracker = KindTracker()

    for token in sorted(schema.resources):
        resource = schema.resources[token]
        _notify(visitor.visit_resource, token, token, resource)
        for name, prop in resource.input_properties.items():
            _visit_property(visitor, tracker, token, name, prop, PropKind.INPUT)
        for name, prop in resource.properties.items():
            _visit_property(visitor, tracker, token, name, prop, PropKind.OUTPUT)

    for token in sorted(schema.functions):
        function = schema.functions[token]
        _notify(visitor.visit_function, token, token, function)
        if function.inputs is not None:
            for name, prop in function.inputs.properties.items():
                _visit_property(visitor, tracker, token, name, prop, PropKind.INPUT)
        if function.outputs is not None:
            for name, prop in function.outputs.properties.items():
                _visit_property(visitor, tracker, token, name, prop, PropKind.OUTPUT)

    logger.debug(
        "Walked %d resources, %d functions; %d types referenced",
        len(schema.resources), len(schema.functions), len(tracker),
    )
    return tracker


def _visit_property(
    visitor: SchemaVisitor,
    tracker: KindTracker,
    owner: str,
    name: str,
    prop: PropertySpec,
    kind: PropKind,
) -> None:
    _notify(visitor.visit_property, f"{owner}.{name}", name, prop, kind)
    for ref in prop.references():
        tracker.declare(ref, kind)


def _notify(callback, token: str, *args) -> None:
    try:
        callback(*args)
    except ConsumerFailure:
        raise
    except Exception as e:
        raise ConsumerFailure(getattr(callback, "__name__", repr(callback)), token) from e


def visit_types(schema: PackageSpec, tracker: KindTracker, visitor: SchemaVisitor) -> None:
    """Call ``visit_type`` for each schema type with the kind recorded by a walk."""
    for token in sorted(schema.types):
        _notify(visitor.visit_type, token, token, schema.types[token], tracker.kind_of(token))


def is_local_type(token: str) -> bool:
    """Whether a tracked token names a type of this package.

    Built-ins such as ``pulumi.json#/Any`` and cross-package references such as
    ``/aws/v6.0.0/schema.json#/types/aws:s3:Bucket`` keep a ``#/`` after the
    local prefix is stripped.
    """
    return "#/" not in strip_prefix(token)


def check_references(schema: PackageSpec, tracker: KindTracker, strict: bool = False) -> list[str]:
    """Return tracked local type tokens with no entry in ``schema.types``.

    With ``strict``, raise ``MalformedReference`` for the first one instead.
    """
    dangling = [
        token for token in tracker.as_dict()
        if is_local_type(token) and strip_prefix(token) not in schema.types
    ]
    if strict and dangling:
        raise MalformedReference(dangling[0])
    return dangling
