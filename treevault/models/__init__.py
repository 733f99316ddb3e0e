"""Pydantic models"""

from treevault.models.schemas import (
    NodeType,
    DropPosition,
    TreeNode,
    Tree,
    CreateNodeRequest,
    UpdateNodeRequest,
    MoveNodeRequest,
    TagRequest,
    MoveCommand,
)

__all__ = [
    "NodeType",
    "DropPosition",
    "TreeNode",
    "Tree",
    # Requests
    "CreateNodeRequest",
    "UpdateNodeRequest",
    "MoveNodeRequest",
    "TagRequest",
    # Drag and drop
    "MoveCommand",
]
