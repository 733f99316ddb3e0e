"""Pydantic schemas"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    """Kinds of tree entries"""

    FOLDER = "FOLDER"  # Может содержать дочерние узлы
    FILE = "FILE"


class DropPosition(str, Enum):
    """Drop intent relative to the hovered node"""

    BEFORE = "before"
    AFTER = "after"
    INTO = "into"


class TreeNode(BaseModel):
    """One node of the server tree.

    ``path``, ``version`` and the timestamps are owned by the server and
    passed through untouched.
    """

    id: str
    name: str
    type: NodeType
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    children: Optional[list["TreeNode"]] = None
    tags: dict[str, str] = Field(default_factory=dict)
    path: str = ""
    position: Optional[int] = None
    version: Optional[int] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    class Config:
        populate_by_name = True

    @property
    def is_folder(self) -> bool:
        return self.type == NodeType.FOLDER

    @property
    def child_list(self) -> list["TreeNode"]:
        """Children, with absent and empty treated alike"""
        return self.children or []


class Tree(BaseModel):
    root: TreeNode


class CreateNodeRequest(BaseModel):
    name: str
    type: NodeType
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    tags: Optional[dict[str, str]] = None

    class Config:
        populate_by_name = True


class UpdateNodeRequest(BaseModel):
    name: str


class MoveNodeRequest(BaseModel):
    new_parent_id: str = Field(alias="newParentId")
    position: int

    class Config:
        populate_by_name = True


class TagRequest(BaseModel):
    key: str
    value: str


@dataclass(frozen=True)
class MoveCommand:
    """Resolved destination of a drag-and-drop move"""

    node_id: str
    new_parent_id: str
    position: int
