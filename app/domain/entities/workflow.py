"""Workflow definition domain entity.

A definition is an ordered node list: node 0 is the trigger (which
event starts a run), the rest are actions executed by an external
runner. Stored nodes are JSON; they are parsed into tagged variants
once, when the definition is loaded.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from app.domain.enums import NodeType, WorkflowStatus
from app.domain.exceptions import WorkflowDefinitionException


@dataclass(frozen=True)
class TriggerNode:
    event_name: str


@dataclass(frozen=True)
class ActionNode:
    kind: str
    config: dict[str, Any] = field(default_factory=dict)


WorkflowNode = TriggerNode | ActionNode


def parse_node(raw: Any, position: int) -> WorkflowNode:
    """Parse one stored node dict into its variant.

    Raises:
        WorkflowDefinitionException: Unknown type or missing required property.
    """
    if not isinstance(raw, dict):
        raise WorkflowDefinitionException(f"Node {position} is not an object")
    properties = raw.get("properties") or {}
    if not isinstance(properties, dict):
        raise WorkflowDefinitionException(f"Node {position} properties must be an object")
    node_type = raw.get("type")
    if node_type == NodeType.TRIGGER.value:
        event_name = properties.get("event_name")
        if not event_name or not isinstance(event_name, str):
            raise WorkflowDefinitionException(
                f"Trigger node {position} requires properties.event_name"
            )
        return TriggerNode(event_name=event_name)
    if node_type == NodeType.ACTION.value:
        kind = properties.get("action_type")
        if not kind or not isinstance(kind, str):
            raise WorkflowDefinitionException(
                f"Action node {position} requires properties.action_type"
            )
        config = {k: v for k, v in properties.items() if k != "action_type"}
        return ActionNode(kind=kind, config=config)
    raise WorkflowDefinitionException(f"Node {position} has unknown type {node_type!r}")


def parse_nodes(raw_nodes: Sequence[Any]) -> tuple[WorkflowNode, ...]:
    """Parse a stored node list. Only node 0 may be (and must be) a trigger."""
    nodes = tuple(parse_node(raw, i) for i, raw in enumerate(raw_nodes))
    for i, node in enumerate(nodes):
        if i == 0 and not isinstance(node, TriggerNode):
            raise WorkflowDefinitionException("First node must be a trigger node")
        if i > 0 and isinstance(node, TriggerNode):
            raise WorkflowDefinitionException(f"Node {i} must be an action node")
    return nodes


@dataclass(frozen=True)
class WorkflowDefinitionEntity:
    """Domain entity for a workflow definition (trigger + actions)."""

    id: str
    name: str
    status: WorkflowStatus
    nodes: tuple[WorkflowNode, ...]

    @property
    def trigger(self) -> TriggerNode | None:
        if self.nodes and isinstance(self.nodes[0], TriggerNode):
            return self.nodes[0]
        return None

    @property
    def total_steps(self) -> int:
        """Number of action steps (trigger excluded)."""
        return max(len(self.nodes) - 1, 0)

    def can_trigger_on(self, event_name: str) -> bool:
        """Return whether this definition is active and its trigger matches."""
        trigger = self.trigger
        return (
            self.status == WorkflowStatus.ACTIVE
            and trigger is not None
            and trigger.event_name == event_name
        )
