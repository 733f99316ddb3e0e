"""Command line entry point: load the tree and print it as an outline"""
import asyncio
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from treevault.config import Settings, get_settings
from treevault.models.schemas import Tree, TreeNode
from treevault.services.api_client import APIClient
from treevault.services.node_operations import NodeOperations
from treevault.services.tree_store import TreeStore

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings):
    """Configure stdout logging, plus a rotating file when log_dir is set"""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.log_dir is not None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = settings.log_dir / "treevault.log"
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    # Suppress verbose httpx logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _format_node(node: TreeNode, depth: int, lines: list[str]):
    marker = "/" if node.is_folder else ""
    tags = ""
    if node.tags:
        tags = " [" + ", ".join(f"{k}={v}" for k, v in sorted(node.tags.items())) + "]"
    lines.append(f"{'  ' * depth}{node.name}{marker}{tags}")
    for child in node.child_list:
        _format_node(child, depth + 1, lines)


def format_tree(tree: Optional[Tree]) -> str:
    """Indented outline of the tree, the root itself is not shown"""
    if tree is None:
        return ""
    lines: list[str] = []
    for child in tree.root.child_list:
        _format_node(child, 0, lines)
    return "\n".join(lines)


async def run(settings: Settings) -> int:
    store = TreeStore()
    async with APIClient(
        settings.api_url,
        api_token=settings.api_token,
        timeout=settings.request_timeout,
        connect_timeout=settings.connect_timeout,
    ) as api:
        operations = NodeOperations(api, store)
        await operations.load_tree()

    if store.error:
        print(f"Error: {store.error}", file=sys.stderr)
        return 1
    print(format_tree(store.tree))
    return 0


def main() -> int:
    settings = get_settings()
    setup_logging(settings)
    logger.info(f"Connecting to {settings.api_url}")
    return asyncio.run(run(settings))


if __name__ == "__main__":
    sys.exit(main())
