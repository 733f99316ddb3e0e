"""Shared fixtures"""
from typing import Optional

import pytest

from treevault.models.schemas import NodeType, Tree, TreeNode


def make_node(
    node_id: str,
    node_type: NodeType = NodeType.FOLDER,
    children: Optional[list[TreeNode]] = None,
    parent_id: Optional[str] = None,
    position: Optional[int] = None,
    name: Optional[str] = None,
    tags: Optional[dict[str, str]] = None,
) -> TreeNode:
    """Build a node, filling parent_id/position of children from their place"""
    if children is not None:
        children = [
            child.model_copy(
                update={
                    "parent_id": node_id,
                    "position": child.position if child.position is not None else index,
                }
            )
            for index, child in enumerate(children)
        ]
    return TreeNode(
        id=node_id,
        name=name or node_id,
        type=node_type,
        parent_id=parent_id,
        children=children,
        position=position,
        tags=tags or {},
        path=f"/{node_id}",
    )


@pytest.fixture
def sample_tree() -> Tree:
    """root
    ├── docs/
    │   ├── a.txt
    │   ├── b.txt
    │   └── c.txt
    ├── src/
    │   └── lib/
    │       └── deep/
    └── readme.md
    """
    docs = make_node(
        "docs",
        children=[
            make_node("a.txt", NodeType.FILE),
            make_node("b.txt", NodeType.FILE),
            make_node("c.txt", NodeType.FILE),
        ],
    )
    deep = make_node("deep")
    lib = make_node("lib", children=[deep])
    src = make_node("src", children=[lib])
    readme = make_node("readme.md", NodeType.FILE)
    return Tree(root=make_node("root", children=[docs, src, readme]))
