"""Report models for the v2 statistics format.

Serialize with ``model_dump_json(by_alias=True)`` to get the camelCase keys
downstream consumers read.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Summary(ReportModel):
    resource_count: int = 0
    resource_description_count: int = 0

    function_count: int = 0
    function_description_count: int = 0

    property_count: int = 0
    property_description_count: int = 0


class Property(ReportModel):
    has_description: bool


class Object(ReportModel):
    properties: dict[str, Property] = Field(default_factory=dict)


class Resource(Object):
    """A resource's output properties, with its input and state objects."""

    input: Object = Field(default_factory=Object)
    state: Object = Field(default_factory=Object)


class Function(Object):
    """A function's output properties, with its input object."""

    input: Object = Field(default_factory=Object)


class Stats(ReportModel):
    summary: Summary = Field(default_factory=Summary)
    config: Resource = Field(default_factory=Resource)
    resources: dict[str, Resource] = Field(default_factory=dict)
    functions: dict[str, Function] = Field(default_factory=dict)
