"""Test pure tree operations"""
from treevault.models.schemas import NodeType, Tree
from treevault.services import tree_ops
from tests.conftest import make_node


def _ids(node):
    return [child.id for child in node.child_list]


class TestFindById:
    def test_finds_root_and_nested(self, sample_tree):
        """Test finding the root and nested nodes"""
        assert tree_ops.find_by_id(sample_tree, "root") is sample_tree.root
        assert tree_ops.find_by_id(sample_tree, "deep").id == "deep"
        assert tree_ops.find_by_id(sample_tree, "b.txt").type == NodeType.FILE

    def test_missing_id(self, sample_tree):
        """Test looking up an unknown id"""
        assert tree_ops.find_by_id(sample_tree, "nope") is None

    def test_empty_tree(self):
        """Test an absent tree"""
        assert tree_ops.find_by_id(None, "root") is None

    def test_get_selected_node(self, sample_tree):
        """Test resolving the selected node"""
        assert tree_ops.get_selected_node(sample_tree, None) is None
        assert tree_ops.get_selected_node(sample_tree, "lib").id == "lib"
        assert tree_ops.get_selected_node(None, "lib") is None


class TestFindParent:
    def test_parent_of_nested(self, sample_tree):
        """Test finding the parent of nested nodes"""
        assert tree_ops.find_parent(sample_tree, "deep").id == "lib"
        assert tree_ops.find_parent(sample_tree, "docs").id == "root"

    def test_root_and_missing(self, sample_tree):
        """Test the root and unknown ids have no parent"""
        assert tree_ops.find_parent(sample_tree, "root") is None
        assert tree_ops.find_parent(sample_tree, "nope") is None
        assert tree_ops.find_parent(None, "docs") is None


class TestIsDescendantOrSelf:
    def test_self(self, sample_tree):
        """Test a node counts as its own descendant"""
        src = tree_ops.find_by_id(sample_tree, "src")
        assert tree_ops.is_descendant_or_self(src, src)

    def test_transitive_descendant(self, sample_tree):
        """Test transitive descendants"""
        src = tree_ops.find_by_id(sample_tree, "src")
        deep = tree_ops.find_by_id(sample_tree, "deep")
        assert tree_ops.is_descendant_or_self(src, deep)
        assert not tree_ops.is_descendant_or_self(deep, src)

    def test_unrelated(self, sample_tree):
        """Test unrelated nodes"""
        docs = tree_ops.find_by_id(sample_tree, "docs")
        deep = tree_ops.find_by_id(sample_tree, "deep")
        assert not tree_ops.is_descendant_or_self(docs, deep)


class TestUpdateNode:
    def test_updates_node(self, sample_tree):
        """Test updating a nested node"""
        result = tree_ops.update_node(
            sample_tree, "deep", lambda n: n.model_copy(update={"name": "deeper"})
        )
        assert tree_ops.find_by_id(result, "deep").name == "deeper"
        # Input is untouched
        assert tree_ops.find_by_id(sample_tree, "deep").name == "deep"

    def test_reuses_untouched_subtrees(self, sample_tree):
        """Test untouched subtrees are shared with the input"""
        result = tree_ops.update_node(
            sample_tree, "deep", lambda n: n.model_copy(update={"name": "deeper"})
        )
        old_root, new_root = sample_tree.root, result.root
        assert new_root is not old_root
        assert new_root.children[0] is old_root.children[0]  # docs
        assert new_root.children[2] is old_root.children[2]  # readme
        assert new_root.children[1] is not old_root.children[1]  # src, on the path

    def test_missing_id_is_noop(self, sample_tree):
        """Test an unknown id leaves the tree as is"""
        result = tree_ops.update_node(sample_tree, "nope", lambda n: n.model_copy())
        assert result is sample_tree
        assert result == sample_tree

    def test_empty_tree(self):
        """Test an absent tree"""
        assert tree_ops.update_node(None, "x", lambda n: n) is None


class TestAddNode:
    def test_add_then_find(self, sample_tree):
        """Test an added node can be found and the input tree is unchanged"""
        new = make_node("new.txt", NodeType.FILE, parent_id="lib", position=1)
        result = tree_ops.add_node(sample_tree, "lib", new)
        assert tree_ops.find_by_id(result, "new.txt") == new
        assert tree_ops.find_by_id(sample_tree, "new.txt") is None

    def test_creates_children_list(self, sample_tree):
        """Test adding under a leaf creates its children list"""
        new = make_node("x", NodeType.FILE, parent_id="deep", position=0)
        result = tree_ops.add_node(sample_tree, "deep", new)
        assert _ids(tree_ops.find_by_id(result, "deep")) == ["x"]

    def test_sorted_by_position(self, sample_tree):
        """Test children stay sorted by position"""
        new = make_node("first", NodeType.FILE, parent_id="docs", position=0)
        result = tree_ops.add_node(
            tree_ops.update_node(
                sample_tree,
                "a.txt",
                lambda n: n.model_copy(update={"position": 5}),
            ),
            "docs",
            new,
        )
        docs = tree_ops.find_by_id(result, "docs")
        positions = [child.position or 0 for child in docs.child_list]
        assert positions == sorted(positions)
        assert _ids(docs)[0] == "first"
        assert _ids(docs)[-1] == "a.txt"

    def test_missing_position_sorts_as_zero(self):
        """Test a missing position sorts as zero"""
        tree = Tree(root=make_node("root", children=[make_node("a"), make_node("b")]))
        new = make_node("c")
        result = tree_ops.add_node(tree, "root", new)
        # a=0, c=None(0), b=1; stable sort keeps a before c
        assert _ids(result.root) == ["a", "c", "b"]

    def test_missing_parent_is_noop(self, sample_tree):
        """Test adding under an unknown parent is a no-op"""
        result = tree_ops.add_node(sample_tree, "nope", make_node("x"))
        assert result is sample_tree

    def test_existing_id_not_duplicated(self, sample_tree):
        """Test adding a node whose id is already a child of the parent"""
        again = make_node("b.txt", NodeType.FILE, parent_id="docs", position=1, name="b2.txt")
        result = tree_ops.add_node(sample_tree, "docs", again)
        docs = tree_ops.find_by_id(result, "docs")
        assert _ids(docs) == ["a.txt", "b.txt", "c.txt"]
        assert tree_ops.find_by_id(result, "b.txt").name == "b2.txt"

    def test_existing_id_elsewhere_is_moved(self, sample_tree):
        """Test adding a node whose id already lives under another parent"""
        again = make_node("readme.md", NodeType.FILE, parent_id="lib", position=5)
        result = tree_ops.add_node(sample_tree, "lib", again)
        assert _ids(result.root) == ["docs", "src"]
        assert _ids(tree_ops.find_by_id(result, "lib")) == ["deep", "readme.md"]

    def test_parent_inside_replaced_node_is_noop(self, sample_tree):
        """Test that a node is never added below its own old copy"""
        result = tree_ops.add_node(sample_tree, "lib", make_node("src", position=0))
        assert result is sample_tree


class TestRemoveNode:
    def test_remove_nested(self, sample_tree):
        """Test removing a nested node"""
        result = tree_ops.remove_node(sample_tree, "deep")
        assert tree_ops.find_by_id(result, "deep") is None
        assert _ids(tree_ops.find_by_id(result, "lib")) == []

    def test_remove_subtree(self, sample_tree):
        """Test removing a folder drops its subtree"""
        result = tree_ops.remove_node(sample_tree, "src")
        for node_id in ("src", "lib", "deep"):
            assert tree_ops.find_by_id(result, node_id) is None
        assert _ids(result.root) == ["docs", "readme.md"]

    def test_removes_every_occurrence(self):
        """Test removes every occurrence"""
        dup = make_node("dup", NodeType.FILE)
        tree = Tree(
            root=make_node(
                "root",
                children=[make_node("a", children=[dup]), make_node("b", children=[dup]), dup],
            )
        )
        result = tree_ops.remove_node(tree, "dup")
        assert tree_ops.find_by_id(result, "dup") is None

    def test_missing_id_is_noop(self, sample_tree):
        """Test an unknown id leaves the tree as is"""
        result = tree_ops.remove_node(sample_tree, "nope")
        assert result is sample_tree

    def test_empty_tree(self):
        """Test an absent tree"""
        assert tree_ops.remove_node(None, "x") is None


class TestSearch:
    def test_blank_query_matches_all(self, sample_tree):
        """Test a blank query keeps every child"""
        assert tree_ops.filter_children(sample_tree.root.children, "  ") == sample_tree.root.children

    def test_match_by_descendant(self, sample_tree):
        """Test a folder matches through a descendant"""
        result = tree_ops.filter_children(sample_tree.root.children, "DEEP")
        assert [n.id for n in result] == ["src"]

    def test_no_match(self, sample_tree):
        """Test a query with no matches"""
        assert tree_ops.filter_children(sample_tree.root.children, "zzz") == []

    def test_none_children(self):
        """Test filtering a missing children list"""
        assert tree_ops.filter_children(None, "a") == []


class TestCollectFolderIds:
    def test_pre_order_folders_only(self, sample_tree):
        """Test folder ids are collected in pre-order"""
        assert tree_ops.collect_folder_ids(sample_tree.root) == ["root", "docs", "src", "lib", "deep"]

    def test_file(self, sample_tree):
        """Test a file has no folder ids"""
        readme = tree_ops.find_by_id(sample_tree, "readme.md")
        assert tree_ops.collect_folder_ids(readme) == []
