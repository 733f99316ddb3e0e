"""Node operations: server calls followed by local mirror updates

Create, rename, delete and tag changes are applied to the local tree once the
server confirms them. A move changes sibling positions under two parents at
once, so after a move the whole tree is fetched again instead.
"""

import logging
from typing import Callable, Optional

from treevault.models.schemas import NodeType, TreeNode
from treevault.services.api_client import APIClient
from treevault.services.tree_store import TreeStore
from treevault.utils.errors import extract_error_detail

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


class NodeOperations:
    """Sequences API calls with ``TreeStore`` updates.

    Each call is attempted once. On failure the server's message (or a
    per-operation default) goes to ``on_error`` and the exception is re-raised;
    the store is left as it was. Concurrent calls are not serialized and
    their results apply in completion order.
    """

    def __init__(
        self,
        api: APIClient,
        store: TreeStore,
        on_success: Optional[Notifier] = None,
        on_error: Optional[Notifier] = None,
    ):
        self.api = api
        self.store = store
        self.on_success = on_success
        self.on_error = on_error

    def _success(self, message: str):
        logger.info(message)
        if self.on_success:
            self.on_success(message)

    def _failure(self, exc: Exception, default: str) -> str:
        message = extract_error_detail(exc, default)
        logger.error(f"{default}: {type(exc).__name__}: {exc}")
        if self.on_error:
            self.on_error(message)
        return message

    async def load_tree(self):
        """Fetch the full tree into the store.

        Failures are reported and stored in ``store.error``, not raised.
        """
        try:
            self.store.set_loading(True)
            self.store.set_error(None)
            tree = await self.api.get_tree()
            self.store.set_tree(tree)
            logger.info("Tree loaded")
        except Exception as e:
            message = self._failure(e, "Failed to load tree")
            self.store.set_error(message)
        finally:
            self.store.set_loading(False)

    async def create_node(self, name: str, node_type: NodeType, parent_id: str):
        logger.info(f"Creating node: name={name}, type={node_type.value}, parent={parent_id}")
        try:
            node = await self.api.create_node(name, node_type, parent_id)
        except Exception as e:
            self._failure(e, "Failed to create node")
            raise
        self.store.add_node(parent_id, node)
        kind = "Folder" if node_type == NodeType.FOLDER else "File"
        self._success(f'{kind} "{name}" created successfully')

    async def rename_node(self, node_id: str, new_name: str):
        try:
            updated = await self.api.update_node(node_id, new_name)
        except Exception as e:
            self._failure(e, "Failed to rename node")
            raise
        # Server fields win, locally loaded children are kept when absent
        fields = updated.model_dump(exclude_unset=True, exclude={"children"})
        if updated.children is not None:
            fields["children"] = updated.children
        self.store.update_node(node_id, lambda node: node.model_copy(update=fields))
        self._success(f'Renamed to "{new_name}" successfully')

    async def delete_node(self, node_id: str):
        try:
            await self.api.delete_node(node_id)
        except Exception as e:
            self._failure(e, "Failed to delete node")
            raise
        self.store.remove_node(node_id)
        if self.store.selected_node_id == node_id:
            self.store.select_node(None)
        self._success("Node deleted successfully")

    async def add_tag(self, node_id: str, key: str, value: str):
        try:
            await self.api.add_tag(node_id, key, value)
        except Exception as e:
            self._failure(e, "Failed to add tag")
            raise
        self.store.update_node(
            node_id,
            lambda node: node.model_copy(update={"tags": {**node.tags, key: value}}),
        )
        self._success("Tag added successfully")

    async def remove_tag(self, node_id: str, key: str):
        try:
            await self.api.remove_tag(node_id, key)
        except Exception as e:
            self._failure(e, "Failed to remove tag")
            raise
        self.store.update_node(
            node_id,
            lambda node: node.model_copy(
                update={"tags": {k: v for k, v in node.tags.items() if k != key}}
            ),
        )
        self._success("Tag removed successfully")

    async def move_node(self, node_id: str, new_parent_id: str, position: int):
        """Move on the server, then replace the local tree with a fresh copy"""
        logger.info(f"Moving node: id={node_id}, parent={new_parent_id}, position={position}")
        try:
            await self.api.move_node(node_id, new_parent_id, position)
            tree = await self.api.get_tree()
        except Exception as e:
            self._failure(e, "Failed to move node")
            raise
        self.store.set_tree(tree)
        self._success("Node moved successfully")

    # === Queries ===

    def find_node_by_id(self, node_id: str) -> Optional[TreeNode]:
        return self.store.find_node(node_id)

    def get_selected_node(self) -> Optional[TreeNode]:
        return self.store.selected_node()
