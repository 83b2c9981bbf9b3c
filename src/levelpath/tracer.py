"""
Debug tracing infrastructure for levelpath.

This module provides data structures for capturing detailed traces of the
level map pipeline. When debug mode is enabled, the generator records every
pipeline stage and every routing decision, i.e. which rule claimed each
connection slot and which primitive now draws it.

This is primarily useful for:
1. Debugging routing issues (understanding why a connector has its shape)
2. Understanding the pipeline flow (seeing intermediate states)
3. Writing targeted tests (verifying specific classification decisions)

Usage:
    >>> generator = LevelMapGenerator()
    >>> level_map = generator.generate("A\\nB | C", 400, debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ConnectorPlacement:
    """
    Record of how one connection slot was classified.

    Attributes:
        slot: Index of the slot, i.e. the flat index of its upper node.
        source: Flat index of the first node of the slot.
        target: Flat index of the second node of the slot.
        rule: Name of the rule that claimed the slot (e.g. "intra_row").
        primitive_kind: Kind of primitive that draws it ("straight", ...).
        primitive_index: Index of that primitive in the routing output.
        reason: Human-readable explanation of the decision.
    """

    slot: int
    source: int
    target: int
    rule: str
    primitive_kind: str
    primitive_index: int
    reason: str

    def __str__(self) -> str:
        return (
            f"slot {self.slot} ({self.source}->{self.target}): "
            f"{self.primitive_kind}#{self.primitive_index} "
            f"[{self.rule}] {self.reason}"
        )


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    The level map pipeline has these stages:
    1. parse - Convert input text or rows into a LevelGraph
    2. layout - Compute node centres and content height
    3. routing - Classify connection slots and build primitives

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class RenderTrace:
    """
    Complete trace of one generate() call.

    Attributes:
        stages: List of pipeline stages with their data
        placements: One ConnectorPlacement per connection slot
        routing: The routing style in effect ("fan" or "steps")
        viewport_width: Viewport width of the pass
    """

    stages: List[PipelineStage] = field(default_factory=list)
    placements: List[ConnectorPlacement] = field(default_factory=list)
    routing: str = "fan"
    viewport_width: float = 0.0

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """Add a pipeline stage snapshot."""
        self.stages.append(PipelineStage(name, data.copy()))

    def add_placement(
        self,
        slot: int,
        source: int,
        target: int,
        rule: str,
        primitive_kind: str,
        primitive_index: int,
        reason: str,
    ) -> None:
        """Record the classification of a connection slot."""
        self.placements.append(
            ConnectorPlacement(
                slot, source, target, rule, primitive_kind, primitive_index, reason
            )
        )

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_placements_by_rule(self, rule: str) -> List[ConnectorPlacement]:
        """Get all slot placements claimed by a rule."""
        return [p for p in self.placements if p.rule == rule]

    def get_placements_for_node(self, flat_index: int) -> List[ConnectorPlacement]:
        """Get all slot placements touching a node."""
        return [
            p for p in self.placements if flat_index in (p.source, p.target)
        ]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the routing style, pipeline stages overview and
        slot counts per rule.
        """
        lines = [
            "=" * 60,
            "LEVEL MAP TRACE SUMMARY",
            "=" * 60,
            "",
            f"Routing: {self.routing}",
            f"Viewport width: {self.viewport_width}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            lines.append(f"  - {stage.name}")

        lines.extend(["", f"Connection slots: {len(self.placements)}", ""])

        rule_counts: Dict[str, int] = {}
        for p in self.placements:
            rule_counts[p.rule] = rule_counts.get(p.rule, 0) + 1

        lines.append("Slots by rule:")
        for rule, count in sorted(rule_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {rule}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("SLOT DECISIONS:")
        lines.append("-" * 40)
        for p in self.placements:
            lines.append(str(p))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
