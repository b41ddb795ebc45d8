"""Operation and fragment lookup over a parsed GraphQL document."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from graphql import DocumentNode, FragmentDefinitionNode, OperationDefinitionNode


def select_operation(
    document: Optional[DocumentNode], operation_name: Optional[str] = None
) -> Optional[OperationDefinitionNode]:
    """Return the operation a request targets.

    With ``operation_name`` this is the first operation carrying that name.
    Without it, the first operation in document order is picked, even when the
    document defines several.
    """
    if document is None:
        return None
    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        if not operation_name:
            return definition
        if definition.name is not None and definition.name.value == operation_name:
            return definition
    return None


def collect_fragments(
    document: Optional[DocumentNode],
) -> Mapping[str, FragmentDefinitionNode]:
    """Map fragment names to their definitions (first definition wins)."""
    fragments: dict[str, FragmentDefinitionNode] = {}
    if document is not None:
        for definition in document.definitions:
            if isinstance(definition, FragmentDefinitionNode):
                fragments.setdefault(definition.name.value, definition)
    return MappingProxyType(fragments)


def operation_type_of(operation: OperationDefinitionNode) -> str:
    return operation.operation.value


def operation_name_of(operation: OperationDefinitionNode) -> Optional[str]:
    return operation.name.value if operation.name is not None else None
