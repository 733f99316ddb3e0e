"""REST API client for the tree service"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from treevault.models.schemas import (
    CreateNodeRequest,
    MoveNodeRequest,
    NodeType,
    TagRequest,
    Tree,
    TreeNode,
    UpdateNodeRequest,
)

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class APIClient:
    """Async HTTP client for the tree service.

    No validation happens here: every call is forwarded as is and
    ``raise_for_status`` surfaces server rejections as ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str = "",
        timeout: float = 60.0,
        connect_timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self.api_token:
                headers["X-API-Token"] = self.api_token
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    # === Tree ===

    async def get_tree(self) -> Tree:
        """Fetch the whole tree"""
        client = self._get_client()
        response = await client.get("/api/v1/tree")
        response.raise_for_status()
        return Tree.model_validate(response.json())

    # === Nodes ===

    async def get_node(self, node_id: str) -> TreeNode:
        """Get node by ID"""
        client = self._get_client()
        response = await client.get(f"/api/v1/nodes/{_segment(node_id)}")
        response.raise_for_status()
        return TreeNode.model_validate(response.json())

    async def create_node(
        self,
        name: str,
        node_type: NodeType,
        parent_id: Optional[str] = None,
        tags: Optional[dict[str, str]] = None,
    ) -> TreeNode:
        """Create node, the server assigns id, path and position"""
        client = self._get_client()
        body = CreateNodeRequest(name=name, type=node_type, parent_id=parent_id, tags=tags)
        response = await client.post(
            "/api/v1/nodes",
            json=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        response.raise_for_status()
        return TreeNode.model_validate(response.json())

    async def update_node(self, node_id: str, name: str) -> TreeNode:
        """Rename node"""
        client = self._get_client()
        response = await client.put(
            f"/api/v1/nodes/{_segment(node_id)}",
            json=UpdateNodeRequest(name=name).model_dump(),
        )
        response.raise_for_status()
        return TreeNode.model_validate(response.json())

    async def delete_node(self, node_id: str) -> None:
        """Delete node with its subtree"""
        client = self._get_client()
        response = await client.delete(f"/api/v1/nodes/{_segment(node_id)}")
        response.raise_for_status()

    async def move_node(self, node_id: str, new_parent_id: str, position: int) -> TreeNode:
        """Move node under ``new_parent_id`` at sibling index ``position``"""
        client = self._get_client()
        body = MoveNodeRequest(new_parent_id=new_parent_id, position=position)
        response = await client.post(
            f"/api/v1/nodes/{_segment(node_id)}/move",
            json=body.model_dump(by_alias=True),
        )
        response.raise_for_status()
        return TreeNode.model_validate(response.json())

    # === Tags ===

    async def add_tag(self, node_id: str, key: str, value: str) -> None:
        client = self._get_client()
        response = await client.post(
            f"/api/v1/nodes/{_segment(node_id)}/tags",
            json=TagRequest(key=key, value=value).model_dump(),
        )
        response.raise_for_status()

    async def remove_tag(self, node_id: str, key: str) -> None:
        client = self._get_client()
        response = await client.delete(
            f"/api/v1/nodes/{_segment(node_id)}/tags/{_segment(key)}"
        )
        response.raise_for_status()
