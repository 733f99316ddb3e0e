"""Tree mirror store: last known server tree plus UI state"""
import logging
from typing import Callable, Optional

from treevault.models.schemas import Tree, TreeNode
from treevault.services import tree_ops
from treevault.services.tree_ops import NodeUpdater

logger = logging.getLogger(__name__)

StoreListener = Callable[["TreeStore"], None]


class TreeStore:
    """Single owner of the client-visible tree.

    Constructed once and handed to every collaborator. Tree mutators go
    through ``tree_ops`` and never raise; UI setters only touch their own
    field. Listeners are notified after every change.
    """

    def __init__(self):
        self.tree: Optional[Tree] = None
        self.selected_node_id: Optional[str] = None
        self.expanded_node_ids: list[str] = []
        self.loading: bool = False
        self.error: Optional[str] = None
        self._listeners: list[StoreListener] = []

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener, returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Store listener failed: {type(e).__name__}: {e}", exc_info=True)

    def reset(self):
        """Restore the empty startup state (listeners are kept)"""
        self.tree = None
        self.selected_node_id = None
        self.expanded_node_ids = []
        self.loading = False
        self.error = None
        self._notify()

    # === Tree ===

    def set_tree(self, tree: Optional[Tree]):
        self.tree = tree
        self._notify()

    def _apply(self, new_tree: Optional[Tree]):
        if new_tree is self.tree:
            return
        self.tree = new_tree
        self._notify()

    def update_node(self, node_id: str, updater: NodeUpdater):
        self._apply(tree_ops.update_node(self.tree, node_id, updater))

    def add_node(self, parent_id: str, node: TreeNode):
        self._apply(tree_ops.add_node(self.tree, parent_id, node))

    def remove_node(self, node_id: str):
        self._apply(tree_ops.remove_node(self.tree, node_id))

    # === UI state ===

    def select_node(self, node_id: Optional[str]):
        self.selected_node_id = node_id
        self._notify()

    def set_expanded_nodes(self, node_ids: list[str]):
        self.expanded_node_ids = list(node_ids)
        self._notify()

    def toggle_expanded(self, node_id: str):
        if node_id in self.expanded_node_ids:
            ids = [i for i in self.expanded_node_ids if i != node_id]
        else:
            ids = [*self.expanded_node_ids, node_id]
        self.set_expanded_nodes(ids)

    def expand_all(self):
        """Expand every folder below the (hidden) root"""
        ids: list[str] = []
        if self.tree is not None:
            for child in self.tree.root.child_list:
                ids.extend(tree_ops.collect_folder_ids(child))
        logger.debug(f"Expanding {len(ids)} folders")
        self.set_expanded_nodes(ids)

    def collapse_all(self):
        self.set_expanded_nodes([])

    def set_loading(self, loading: bool):
        self.loading = loading
        self._notify()

    def set_error(self, error: Optional[str]):
        self.error = error
        self._notify()

    # === Queries ===

    def find_node(self, node_id: str) -> Optional[TreeNode]:
        return tree_ops.find_by_id(self.tree, node_id)

    def selected_node(self) -> Optional[TreeNode]:
        return tree_ops.get_selected_node(self.tree, self.selected_node_id)
