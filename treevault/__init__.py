"""TreeVault client: local mirror of the server file tree"""

from treevault.exceptions import (
    AppError,
    DropError,
    InvalidTargetError,
    CyclicMoveError,
    NoParentError,
    TargetNotFoundError,
)
from treevault.models import NodeType, DropPosition, TreeNode, Tree, MoveCommand
from treevault.services import (
    APIClient,
    DragAndDrop,
    NodeOperations,
    TreeStore,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "AppError",
    "DropError",
    "InvalidTargetError",
    "CyclicMoveError",
    "NoParentError",
    "TargetNotFoundError",
    # Models
    "NodeType",
    "DropPosition",
    "TreeNode",
    "Tree",
    "MoveCommand",
    # Services
    "APIClient",
    "DragAndDrop",
    "NodeOperations",
    "TreeStore",
]
