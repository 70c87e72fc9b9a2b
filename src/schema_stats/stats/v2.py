"""Entry points for the v2 statistics and the type-kind report."""

from schema_stats.schema.models import PackageSpec
from schema_stats.stats.aggregator import SummaryAggregator
from schema_stats.stats.format_v2 import Stats
from schema_stats.stats.kinds import KindTracker, PropKind
from schema_stats.stats.walker import NullVisitor, walk


def v2(schema: PackageSpec) -> Stats:
    """Walk the schema once and return the summary with config, resource and function details."""
    aggregator = SummaryAggregator()
    aggregator.record_config(schema.config)
    walk(schema, aggregator)
    return aggregator.summarize()


def type_kinds(schema: PackageSpec) -> dict[str, PropKind]:
    """Classify every referenced type as input, output or input&output."""
    return walk(schema, NullVisitor(), KindTracker()).as_dict()
