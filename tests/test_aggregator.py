import json
from pathlib import Path

import pytest

from schema_stats.errors import AggregatorStateError
from schema_stats.schema.loader import load_schema
from schema_stats.schema.models import (
    ConfigSpec,
    FunctionSpec,
    ObjectTypeSpec,
    PackageSpec,
    PropertySpec,
    ResourceSpec,
)
from schema_stats.stats.aggregator import SummaryAggregator
from schema_stats.stats.kinds import PropKind
from schema_stats.stats.v2 import type_kinds, v2
from schema_stats.stats.walker import walk

FIXTURES = Path(__file__).parent / "fixtures"


class TestSummaryAggregator:
    def test_single_resource(self):
        schema = PackageSpec(resources={
            "pkg:index:Thing": ResourceSpec(
                input_properties={"name": PropertySpec()},
                properties={"id": PropertySpec(ref="#/types/pkg:index:Id", description="The id.")},
            ),
        })
        aggregator = SummaryAggregator()
        tracker = walk(schema, aggregator)
        stats = aggregator.summarize()

        assert stats.summary.resource_count == 1
        assert stats.summary.property_count == 2
        assert stats.summary.property_description_count == 1
        assert tracker.kind_of("pkg:index:Id") == PropKind.OUTPUT

        thing = stats.resources["pkg:index:Thing"]
        assert thing.input.properties["name"].has_description is False
        assert thing.properties["id"].has_description is True

    def test_description_counts_come_from_definition(self):
        schema = PackageSpec(
            resources={
                "pkg:index:A": ResourceSpec(description="Documented."),
                "pkg:index:B": ResourceSpec(description="  "),
            },
            functions={"pkg:index:f": FunctionSpec(description="Documented.")},
        )
        stats = v2(schema)
        assert stats.summary.resource_count == 2
        assert stats.summary.resource_description_count == 1
        assert stats.summary.function_count == 1
        assert stats.summary.function_description_count == 1

    def test_function_details(self):
        schema = PackageSpec(functions={
            "pkg:index:f": FunctionSpec(
                inputs=ObjectTypeSpec(properties={"q": PropertySpec(description="Query.")}),
                outputs=ObjectTypeSpec(properties={"r": PropertySpec()}),
            ),
        })
        stats = v2(schema)
        fn = stats.functions["pkg:index:f"]
        assert list(fn.input.properties) == ["q"]
        assert list(fn.properties) == ["r"]
        assert fn.input.properties["q"].has_description is True

    def test_state_is_reported_but_not_counted(self):
        schema = PackageSpec(resources={
            "pkg:index:Thing": ResourceSpec(
                state_inputs=ObjectTypeSpec(properties={"name": PropertySpec(description="Name.")}),
            ),
        })
        stats = v2(schema)
        assert stats.resources["pkg:index:Thing"].state.properties["name"].has_description is True
        assert stats.summary.property_count == 0

    def test_summarize_twice_raises(self):
        aggregator = SummaryAggregator()
        aggregator.summarize()
        with pytest.raises(AggregatorStateError):
            aggregator.summarize()

    def test_visit_after_summarize_raises(self):
        aggregator = SummaryAggregator()
        aggregator.summarize()
        with pytest.raises(AggregatorStateError):
            aggregator.visit_resource("pkg:index:A", ResourceSpec())

    def test_record_config_after_summarize_raises(self):
        aggregator = SummaryAggregator()
        aggregator.summarize()
        with pytest.raises(AggregatorStateError):
            aggregator.record_config(ConfigSpec())

    def test_property_without_owner_raises(self):
        with pytest.raises(AggregatorStateError):
            SummaryAggregator().visit_property("p", PropertySpec(), PropKind.INPUT)


class TestV2:
    def test_empty_schema(self):
        stats = v2(PackageSpec())
        assert stats.model_dump(by_alias=True) == {
            "summary": {
                "resourceCount": 0,
                "resourceDescriptionCount": 0,
                "functionCount": 0,
                "functionDescriptionCount": 0,
                "propertyCount": 0,
                "propertyDescriptionCount": 0,
            },
            "config": {
                "properties": {},
                "input": {"properties": {}},
                "state": {"properties": {}},
            },
            "resources": {},
            "functions": {},
        }

    def test_fixture_summary(self):
        stats = v2(load_schema(FIXTURES / "schema.json"))
        assert stats.summary.model_dump(by_alias=True) == {
            "resourceCount": 2,
            "resourceDescriptionCount": 1,
            "functionCount": 2,
            "functionDescriptionCount": 1,
            "propertyCount": 11,
            "propertyDescriptionCount": 4,
        }

    def test_property_count_conservation(self):
        schema = load_schema(FIXTURES / "schema.json")
        expected = sum(len(r.input_properties) + len(r.properties) for r in schema.resources.values())
        for fn in schema.functions.values():
            expected += len(fn.inputs.properties) if fn.inputs else 0
            expected += len(fn.outputs.properties) if fn.outputs else 0

        stats = v2(schema)
        assert stats.summary.property_count == expected
        assert stats.summary.resource_count == len(schema.resources)
        assert stats.summary.function_count == len(schema.functions)

    def test_fixture_details(self):
        stats = v2(load_schema(FIXTURES / "schema.json"))
        thing = stats.resources["pkg:index:Thing"]
        assert list(thing.input.properties) == ["name", "tags", "shared"]
        assert list(thing.properties) == ["id", "name"]
        assert list(thing.state.properties) == ["name"]
        assert stats.functions["pkg:index:ping"].properties == {}

    def test_serialization_is_deterministic(self):
        schema = load_schema(FIXTURES / "schema.json")
        first = v2(schema).model_dump_json(by_alias=True)
        second = v2(schema).model_dump_json(by_alias=True)
        assert first == second
        doc = json.loads(first)
        assert doc["resources"]["pkg:index:Thing"]["properties"]["id"] == {"hasDescription": True}

    def test_config_variables_are_reported_but_not_counted(self):
        stats = v2(load_schema(FIXTURES / "schema.json"))
        assert stats.config.properties["region"].has_description is True
        assert stats.summary.property_count == 11
        doc = json.loads(stats.model_dump_json(by_alias=True))
        assert doc["config"]["properties"] == {"region": {"hasDescription": True}}

    def test_type_kinds(self):
        kinds = type_kinds(load_schema(FIXTURES / "schema.json"))
        assert kinds["pkg:index:Shared"] == PropKind.INPUT_OUTPUT
        assert kinds["pkg:index:Tag"] == PropKind.INPUT
        assert "pkg:index:Unused" not in kinds
