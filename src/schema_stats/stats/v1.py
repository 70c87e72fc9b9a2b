"""Legacy (v1) schema statistics: description bytes and missing descriptions.

Resources are de-duplicated across API versions. A complex type reached
through ``$ref`` is expanded once per report, and its properties count toward
both the input and the output totals. A description is missing only when it
is the empty string.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from schema_stats.errors import MalformedToken
from schema_stats.schema.models import PackageSpec, PropertySpec
from schema_stats.stats.kinds import strip_prefix


class ResourceStats(BaseModel):
    """Statistics for the resources section.

    Input and output totals include the properties of nested types: given a
    property referencing type Foo with one property Foo.Bar, Foo.Bar is added
    to both totals whichever side the referencing property is on.
    """

    TotalResources: int = 0
    TotalDescriptionBytes: int = 0
    TotalInputProperties: int = 0
    InputPropertiesMissingDescriptions: int = 0
    TotalOutputProperties: int = 0
    OutputPropertiesMissingDescriptions: int = 0


class FunctionStats(BaseModel):
    """Statistics for the functions section. Nested types are not expanded."""

    TotalFunctions: int = 0
    TotalDescriptionBytes: int = 0
    TotalInputPropertyDescriptionBytes: int = 0
    InputPropertiesMissingDescriptions: int = 0
    TotalOutputPropertyDescriptionBytes: int = 0
    OutputPropertiesMissingDescriptions: int = 0


class PulumiSchemaStats(BaseModel):
    Functions: FunctionStats = Field(default_factory=FunctionStats)
    Resources: ResourceStats = Field(default_factory=ResourceStats)


def versionless_name(token: str) -> str:
    """Drop the package and API version from a resource token.

    "azure-native:appplatform/v20230101preview:Foo" -> "appplatform:Foo"
    """
    parts = token.split(":")
    if len(parts) != 3:
        raise MalformedToken(token)
    module = parts[1]
    module_parts = module.split("/")
    if len(module_parts) == 2:
        module = module_parts[0]
    return f"{module}:{parts[2]}"


def is_versioned_name(token: str) -> bool:
    """Whether the token's module carries an API version, e.g. "appplatform/v20230101"."""
    return "/v" in token


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _missing(prop: PropertySpec) -> bool:
    return prop.description == ""


@dataclass
class _TypeCounts:
    total_inputs: int = 0
    inputs_missing: int = 0
    total_outputs: int = 0
    outputs_missing: int = 0


def _count_type(schema: PackageSpec, type_token: str, visited_types: set[str]) -> _TypeCounts:
    """Count a nested type's properties on both sides, expanding each type once.

    Nested types contribute their inputs and both missing counts, but only
    the outer type's own property count reaches ``total_outputs``.
    """
    if type_token in visited_types:
        return _TypeCounts()
    visited_types.add(type_token)

    type_spec = schema.types.get(type_token)
    properties = type_spec.properties if type_spec is not None else {}

    counts = _TypeCounts(total_inputs=len(properties), total_outputs=len(properties))
    for prop in properties.values():
        if _missing(prop):
            counts.inputs_missing += 1
            counts.outputs_missing += 1
        if prop.ref:
            nested = _count_type(schema, strip_prefix(prop.ref), visited_types)
            counts.total_inputs += nested.total_inputs
            counts.inputs_missing += nested.inputs_missing
            counts.outputs_missing += nested.outputs_missing
    return counts


def _add_nested(resources: ResourceStats, counts: _TypeCounts) -> None:
    resources.TotalInputProperties += counts.total_inputs
    resources.InputPropertiesMissingDescriptions += counts.inputs_missing
    resources.TotalOutputProperties += counts.total_outputs
    resources.OutputPropertiesMissingDescriptions += counts.outputs_missing


def count_stats(schema: PackageSpec) -> PulumiSchemaStats:
    """Compute the v1 statistics for a schema."""
    stats = PulumiSchemaStats()
    resources = stats.Resources
    functions = stats.Functions

    uniques: set[str] = set()
    visited_types: set[str] = set()

    for token in sorted(schema.resources):
        base_name = versionless_name(token)
        if base_name in uniques:
            continue
        uniques.add(base_name)

        resource = schema.resources[token]
        resources.TotalDescriptionBytes += _byte_len(resource.description)

        resources.TotalInputProperties += len(resource.input_properties)
        for prop in resource.input_properties.values():
            if _missing(prop):
                resources.InputPropertiesMissingDescriptions += 1
            if prop.ref:
                _add_nested(resources, _count_type(schema, strip_prefix(prop.ref), visited_types))

        resources.TotalOutputProperties += len(resource.properties)
        for prop in resource.properties.values():
            if _missing(prop):
                resources.OutputPropertiesMissingDescriptions += 1
            if prop.ref:
                _add_nested(resources, _count_type(schema, strip_prefix(prop.ref), visited_types))

    resources.TotalResources = len(uniques)

    functions.TotalFunctions = len(schema.functions)
    for token in sorted(schema.functions):
        function = schema.functions[token]
        functions.TotalDescriptionBytes += _byte_len(function.description)

        if function.inputs is not None:
            for prop in function.inputs.properties.values():
                functions.TotalInputPropertyDescriptionBytes += _byte_len(prop.description)
                if _missing(prop):
                    functions.InputPropertiesMissingDescriptions += 1

        if function.outputs is not None:
            for prop in function.outputs.properties.values():
                functions.TotalOutputPropertyDescriptionBytes += _byte_len(prop.description)
                if _missing(prop):
                    functions.OutputPropertiesMissingDescriptions += 1

    return stats
