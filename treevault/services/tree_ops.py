"""Pure operations over the client-side tree mirror

Every mutation returns a new ``Tree`` and leaves the input untouched.
Only the path from the root to the changed node is copied; every other
subtree is reused as the same object. A missing target is never an error:
the input tree is returned as is.
"""

import logging
from typing import Callable, Optional

from treevault.models.schemas import Tree, TreeNode

logger = logging.getLogger(__name__)

NodeUpdater = Callable[[TreeNode], TreeNode]


# ========== Lookup ==========


def _find_in(node: TreeNode, node_id: str) -> Optional[TreeNode]:
    if node.id == node_id:
        return node
    for child in node.child_list:
        found = _find_in(child, node_id)
        if found is not None:
            return found
    return None


def find_by_id(tree: Optional[Tree], node_id: str) -> Optional[TreeNode]:
    """Depth-first search for a node, None if absent"""
    if tree is None:
        return None
    return _find_in(tree.root, node_id)


def get_selected_node(tree: Optional[Tree], selected_id: Optional[str]) -> Optional[TreeNode]:
    if selected_id is None:
        return None
    return find_by_id(tree, selected_id)


def _find_parent_in(node: TreeNode, node_id: str) -> Optional[TreeNode]:
    for child in node.child_list:
        if child.id == node_id:
            return node
        found = _find_parent_in(child, node_id)
        if found is not None:
            return found
    return None


def find_parent(tree: Optional[Tree], node_id: str) -> Optional[TreeNode]:
    """Return the node holding ``node_id`` among its children.

    None for the root itself and for unknown ids.
    """
    if tree is None:
        return None
    return _find_parent_in(tree.root, node_id)


def is_descendant_or_self(ancestor: TreeNode, node: TreeNode) -> bool:
    """True if ``node`` is ``ancestor`` or lies anywhere in its subtree"""
    if ancestor.id == node.id:
        return True
    return any(is_descendant_or_self(child, node) for child in ancestor.child_list)


# ========== Mutation ==========


def _sort_key(node: TreeNode) -> int:
    return node.position if node.position is not None else 0


def _update_in(node: TreeNode, node_id: str, updater: NodeUpdater) -> TreeNode:
    if node.id == node_id:
        return updater(node)
    if not node.children:
        return node

    children = list(node.children)
    for index, child in enumerate(children):
        updated = _update_in(child, node_id, updater)
        if updated is not child:
            # ids are unique, later siblings stay as they are
            children[index] = updated
            return node.model_copy(update={"children": children})
    return node


def update_node(tree: Optional[Tree], node_id: str, updater: NodeUpdater) -> Optional[Tree]:
    """Replace node ``node_id`` with ``updater(node)``"""
    if tree is None:
        return None
    root = _update_in(tree.root, node_id, updater)
    if root is tree.root:
        return tree
    return tree.model_copy(update={"root": root})


def add_node(tree: Optional[Tree], parent_id: str, new_node: TreeNode) -> Optional[Tree]:
    """Append ``new_node`` under ``parent_id`` and re-sort siblings by position.

    Nodes without a position sort as position 0. The sort is stable, so
    equal positions keep insertion order. A node already present under the
    same id (e.g. from a reload that raced the create response) is replaced,
    so an id appears at most once.
    """
    if tree is None:
        return None

    def append_child(parent: TreeNode) -> TreeNode:
        children = sorted([*parent.child_list, new_node], key=_sort_key)
        return parent.model_copy(update={"children": children})

    base = remove_node(tree, new_node.id)
    result = update_node(base, parent_id, append_child)
    if result is base:
        logger.debug(f"add_node: parent {parent_id} not found, skipped")
        return tree
    return result


def _remove_from(node: TreeNode, node_id: str) -> TreeNode:
    if not node.children:
        return node

    changed = False
    kept: list[TreeNode] = []
    for child in node.children:
        if child.id == node_id:
            changed = True
            continue
        pruned = _remove_from(child, node_id)
        if pruned is not child:
            changed = True
        kept.append(pruned)

    if not changed:
        return node
    return node.model_copy(update={"children": kept})


def remove_node(tree: Optional[Tree], node_id: str) -> Optional[Tree]:
    """Drop ``node_id`` from every children list, at any depth"""
    if tree is None:
        return None
    root = _remove_from(tree.root, node_id)
    if root is tree.root:
        return tree
    return tree.model_copy(update={"root": root})


# ========== Search / expansion ==========


def node_matches(node: TreeNode, query: str) -> bool:
    """True if the name or any descendant name contains ``query`` (case-insensitive)"""
    if not query.strip():
        return True
    needle = query.lower()
    if needle in node.name.lower():
        return True
    return any(node_matches(child, query) for child in node.child_list)


def filter_children(children: Optional[list[TreeNode]], query: str) -> list[TreeNode]:
    """Keep the nodes that match or lead to a match"""
    children = children or []
    if not query.strip():
        return list(children)
    return [child for child in children if node_matches(child, query)]


def collect_folder_ids(node: TreeNode) -> list[str]:
    """Pre-order ids of all folders in the subtree, ``node`` included"""
    ids: list[str] = []
    if node.is_folder:
        ids.append(node.id)
        for child in node.child_list:
            ids.extend(collect_folder_ids(child))
    return ids
