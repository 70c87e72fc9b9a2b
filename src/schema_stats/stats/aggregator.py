"""Visitor that folds a walk into v2 summary counters and per-entity details."""

from schema_stats.errors import AggregatorStateError
from schema_stats.schema.models import (
    ComplexTypeSpec,
    ConfigSpec,
    FunctionSpec,
    PropertySpec,
    ResourceSpec,
)
from schema_stats.stats import format_v2
from schema_stats.stats.kinds import PropKind
from schema_stats.stats.walker import SchemaVisitor


class SummaryAggregator(SchemaVisitor):
    """Counts every resource, function and property it is told about.

    Resource and function description counts come from the definition's own
    ``description``. Properties are recorded under whichever resource or
    function was visited last: inputs in ``input``, outputs in ``properties``.
    """

    def __init__(self):
        self.stats = format_v2.Stats()
        self._current: format_v2.Resource | format_v2.Function | None = None
        self._summarized = False

    def record_config(self, config: ConfigSpec) -> None:
        """Report the package config variables. They are not counted as properties."""
        self._check_open()
        self.stats.config = format_v2.Resource(properties=_object_detail(config.variables).properties)

    def visit_resource(self, token: str, resource: ResourceSpec) -> None:
        self._check_open()
        summary = self.stats.summary
        summary.resource_count += 1
        if resource.description.strip():
            summary.resource_description_count += 1

        detail = format_v2.Resource()
        if resource.state_inputs is not None:
            detail.state = _object_detail(resource.state_inputs.properties)
        self.stats.resources[token] = detail
        self._current = detail

    def visit_function(self, token: str, function: FunctionSpec) -> None:
        self._check_open()
        summary = self.stats.summary
        summary.function_count += 1
        if function.description.strip():
            summary.function_description_count += 1

        detail = format_v2.Function()
        self.stats.functions[token] = detail
        self._current = detail

    def visit_type(self, token: str, type_spec: ComplexTypeSpec, kind: PropKind) -> None:
        pass

    def visit_property(self, name: str, prop: PropertySpec, kind: PropKind) -> None:
        self._check_open()
        summary = self.stats.summary
        summary.property_count += 1
        if prop.has_description:
            summary.property_description_count += 1

        if self._current is None:
            raise AggregatorStateError(f"Property {name!r} visited outside a resource or function")
        target = self._current.input if kind == PropKind.INPUT else self._current
        target.properties[name] = format_v2.Property(has_description=prop.has_description)

    def summarize(self) -> format_v2.Stats:
        """Finish the fold. Call exactly once, after the walk."""
        self._check_open()
        self._summarized = True
        self._current = None
        return self.stats

    def _check_open(self) -> None:
        if self._summarized:
            raise AggregatorStateError("Aggregator has already been summarized")


def _object_detail(properties: dict[str, PropertySpec]) -> format_v2.Object:
    return format_v2.Object(
        properties={
            name: format_v2.Property(has_description=prop.has_description)
            for name, prop in properties.items()
        }
    )
