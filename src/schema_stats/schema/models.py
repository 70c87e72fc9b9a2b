"""In-memory models for a Pulumi-style package schema.

The loader validates the raw JSON/YAML document into these models, and the
statistics walk reads them. Field names follow the document (camelCase and
``$ref`` via aliases); unknown keys are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class SchemaModel(BaseModel):
    """Common configuration for schema models."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class TypeSpec(SchemaModel):
    """A type reference: primitive type, ``$ref``, array items or map values."""

    type: str = ""
    ref: str = Field(default="", alias="$ref")
    items: "TypeSpec | None" = None
    additional_properties: "TypeSpec | None" = Field(default=None, alias="additionalProperties")


class PropertySpec(TypeSpec):
    """A named property of a resource, function, type or config."""

    description: str = ""
    deprecation_message: str = Field(default="", alias="deprecationMessage")
    secret: bool = False

    @property
    def has_description(self) -> bool:
        return bool(self.description.strip())

    def references(self) -> list[str]:
        """Type references carried directly, as collection items, or as map values."""
        refs = []
        if self.ref:
            refs.append(self.ref)
        if self.items is not None and self.items.ref:
            refs.append(self.items.ref)
        if self.additional_properties is not None and self.additional_properties.ref:
            refs.append(self.additional_properties.ref)
        return refs


class ObjectTypeSpec(SchemaModel):
    description: str = ""
    properties: dict[str, PropertySpec] = {}
    required: list[str] = []
    type: str = ""


class ComplexTypeSpec(ObjectTypeSpec):
    """An object or enum type from the schema's ``types`` section."""

    enum: list[dict] = []


class ResourceSpec(ObjectTypeSpec):
    """A resource: output ``properties`` plus ``inputProperties``."""

    input_properties: dict[str, PropertySpec] = Field(default={}, alias="inputProperties")
    required_inputs: list[str] = Field(default=[], alias="requiredInputs")
    state_inputs: ObjectTypeSpec | None = Field(default=None, alias="stateInputs")
    deprecation_message: str = Field(default="", alias="deprecationMessage")
    is_component: bool = Field(default=False, alias="isComponent")


class FunctionSpec(SchemaModel):
    """A function (invoke). Either side may be absent."""

    description: str = ""
    inputs: ObjectTypeSpec | None = None
    outputs: ObjectTypeSpec | None = None
    deprecation_message: str = Field(default="", alias="deprecationMessage")


class ConfigSpec(SchemaModel):
    variables: dict[str, PropertySpec] = {}


class PackageSpec(SchemaModel):
    """A whole package schema, keyed by token in each section."""

    name: str = ""
    version: str = ""
    description: str = ""
    config: ConfigSpec = ConfigSpec()
    types: dict[str, ComplexTypeSpec] = {}
    resources: dict[str, ResourceSpec] = {}
    functions: dict[str, FunctionSpec] = {}
