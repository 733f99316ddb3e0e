"""Client services: API access, tree mirror, drag and drop, node operations"""

from treevault.services.api_client import APIClient
from treevault.services.drag_drop import DragAndDrop, resolve_drop_position, resolve_move
from treevault.services.node_operations import NodeOperations
from treevault.services.tree_store import TreeStore

__all__ = [
    "APIClient",
    "DragAndDrop",
    "resolve_drop_position",
    "resolve_move",
    "NodeOperations",
    "TreeStore",
]
