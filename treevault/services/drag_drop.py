"""Drag-and-drop move resolution for the tree view"""
import logging
from typing import Awaitable, Callable, Optional

from treevault.exceptions import (
    CyclicMoveError,
    DropError,
    InvalidTargetError,
    NoParentError,
    TargetNotFoundError,
)
from treevault.models.schemas import DropPosition, MoveCommand, NodeType, TreeNode
from treevault.services.tree_ops import is_descendant_or_self

logger = logging.getLogger(__name__)

MoveHandler = Callable[[str, str, int], Awaitable[None]]
ErrorHandler = Callable[[str], None]

# Доли высоты строки: верх -> before, низ -> after, середина -> into
BEFORE_THRESHOLD = 0.25
AFTER_THRESHOLD = 0.75


def resolve_drop_position(offset_y: float, height: float, node_type: NodeType) -> DropPosition:
    """Map the pointer offset inside a row to a drop intent.

    Files never accept INTO: their middle band splits at half height.
    """
    if offset_y < height * BEFORE_THRESHOLD:
        return DropPosition.BEFORE
    if offset_y > height * AFTER_THRESHOLD:
        return DropPosition.AFTER
    if node_type == NodeType.FOLDER:
        return DropPosition.INTO
    return DropPosition.BEFORE if offset_y < height / 2 else DropPosition.AFTER


def _index_of(children: list[TreeNode], node_id: str) -> int:
    for index, child in enumerate(children):
        if child.id == node_id:
            return index
    return -1


def resolve_move(
    dragged: TreeNode,
    target: TreeNode,
    parent: Optional[TreeNode],
    position: Optional[DropPosition],
) -> Optional[MoveCommand]:
    """Turn a drop into a move command.

    Returns None when there is nothing to do (self-drop, no intent).
    Raises a ``DropError`` subclass when the drop is invalid.
    """
    if dragged.id == target.id or position is None:
        return None

    if position == DropPosition.INTO:
        if target.type != NodeType.FOLDER:
            raise InvalidTargetError("Can only move nodes into folders")
        if is_descendant_or_self(dragged, target):
            raise CyclicMoveError("Cannot move a folder into itself or its descendants")
        # Always appended at the end of the folder
        return MoveCommand(dragged.id, target.id, len(target.child_list))

    if parent is None:
        raise NoParentError("Cannot reorder root level nodes")
    if is_descendant_or_self(dragged, parent):
        raise CyclicMoveError("Cannot move a folder into its own descendant")

    siblings = parent.child_list
    target_index = _index_of(siblings, target.id)
    if target_index == -1:
        raise TargetNotFoundError("Failed to determine drop position")

    new_position = target_index if position == DropPosition.BEFORE else target_index + 1

    # Removing the dragged node first shifts later siblings down by one
    dragged_index = _index_of(siblings, dragged.id)
    if dragged_index != -1 and dragged_index < new_position:
        new_position -= 1

    return MoveCommand(dragged.id, parent.id, new_position)


class DragAndDrop:
    """State of one drag gesture: idle, dragging, hovering a target.

    The handlers never raise for invalid drops; the reason goes to the
    ``on_error`` callback and the drag state is always cleared on drop.
    """

    def __init__(self):
        self.dragged_node: Optional[TreeNode] = None
        self.drop_target: Optional[str] = None
        self.drop_position: Optional[DropPosition] = None

    @staticmethod
    def is_descendant(parent: TreeNode, candidate: TreeNode) -> bool:
        return is_descendant_or_self(parent, candidate)

    def handle_drag_start(self, node: TreeNode):
        self.dragged_node = node
        logger.debug(f"Drag start: {node.name} ({node.id})")

    def handle_drag_over(self, node: TreeNode, offset_y: float, height: float):
        if self.dragged_node is None or self.dragged_node.id == node.id:
            return
        self.drop_target = node.id
        self.drop_position = resolve_drop_position(offset_y, height, node.type)

    def handle_drag_leave(self):
        self.drop_target = None
        self.drop_position = None

    def reset(self):
        self.dragged_node = None
        self.drop_target = None
        self.drop_position = None

    async def handle_drop(
        self,
        target: TreeNode,
        parent: Optional[TreeNode],
        on_move: MoveHandler,
        on_error: ErrorHandler,
    ) -> Optional[MoveCommand]:
        """Finish the gesture on ``target`` (whose parent is ``parent``).

        Returns the command passed to ``on_move``, or None if nothing moved.
        Exceptions raised by ``on_move`` propagate after the state is cleared.
        """
        position = self.drop_position
        dragged = self.dragged_node
        self.drop_target = None
        self.drop_position = None

        try:
            if dragged is None:
                logger.debug("Drop ignored: nothing is being dragged")
                return None

            logger.debug(
                f"Drop: dragged={dragged.name}, target={target.name}, "
                f"position={position.value if position else None}, "
                f"parent={parent.name if parent else None}"
            )

            try:
                command = resolve_move(dragged, target, parent, position)
            except DropError as e:
                logger.info(f"Drop rejected: {e.reason}")
                on_error(e.reason)
                return None

            if command is None:
                return None

            logger.info(
                f"Moving {command.node_id} -> parent={command.new_parent_id}, "
                f"position={command.position}"
            )
            await on_move(command.node_id, command.new_parent_id, command.position)
            return command
        finally:
            self.dragged_node = None
