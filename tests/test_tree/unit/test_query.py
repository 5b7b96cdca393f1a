"""子树查询测试

测试 SubtreeQuery / TreeManager 的查询功能：
1. 子孙 / 子节点查询
2. 祖先、父节点、兄弟节点
3. 计数与删除
4. 子树森林构建
"""

from ympath.store import MemoryStore
from ympath.tree import Criteria, TreeManager

from tests.helpers.tree_nodes import Node, build_sample_tree, fetch


def _ids(records):
    return sorted(r.id for r in records)


class TestDescendants:
    """子孙查询测试"""

    def test_get_descendants(self, manager, sample_tree):
        assert _ids(manager.get_descendants(sample_tree["R"])) == [2, 3, 4]
        assert _ids(manager.get_descendants(sample_tree["A"])) == [3, 4]
        assert manager.get_descendants(sample_tree["B"]) == []

    def test_root_excluded(self, manager, sample_tree):
        ids = _ids(manager.get_descendants(sample_tree["R"]))
        assert 1 not in ids

    def test_filters(self, manager, memory_store, sample_tree):
        c = memory_store.find_one(Criteria(equals={"id": 4}))
        c.active = False
        memory_store.save(c)

        result = manager.get_descendants(sample_tree["R"], filters={"active": True})
        assert _ids(result) == [2, 3]

    def test_filters_cannot_override_path(self, manager, sample_tree):
        """测试调用方的过滤条件不能覆盖父节点条件"""
        result = manager.get_children(sample_tree["R"], filters={"parent_id": 2})
        assert _ids(result) == [2]

    def test_fields_projection(self, manager, sample_tree):
        result = manager.get_descendants(sample_tree["A"], fields=["mpath"])
        assert {r.name for r in result} == {None}
        assert {r.mpath for r in result} == {"/1/2"}

    def test_segment_aware_prefix(self, manager):
        """测试 ID 为 12 与 120 的节点子树互不干扰"""
        n12 = manager.attach(Node(id=12))
        n120 = manager.attach(Node(id=120))
        manager.attach(Node(id=13), n12)
        manager.attach(Node(id=121), n120)

        assert _ids(manager.get_descendants(n12)) == [13]
        assert _ids(manager.get_descendants(n120)) == [121]


class TestChildren:
    """子节点查询测试"""

    def test_one_level_only(self, manager, sample_tree):
        assert _ids(manager.get_children(sample_tree["R"])) == [2]
        assert _ids(manager.get_children(sample_tree["A"])) == [3, 4]

    def test_counts_and_leaf(self, manager, sample_tree):
        assert manager.count_children(sample_tree["A"]) == 2
        assert manager.count_descendants(sample_tree["R"]) == 3
        assert manager.is_leaf(sample_tree["B"]) is True
        assert manager.is_leaf(sample_tree["A"]) is False


class TestRelatives:
    """祖先 / 父节点 / 兄弟节点测试"""

    def test_get_ancestors_ordered_from_root(self, manager, sample_tree):
        ancestors = manager.get_ancestors(sample_tree["B"])
        assert [a.id for a in ancestors] == [1, 2]

    def test_root_has_no_ancestors(self, manager, memory_store, sample_tree):
        assert manager.get_ancestors(sample_tree["R"]) == []

    def test_ancestors_of_copy_with_string_id(self):
        """测试复制出的节点（字符串 ID）能找到整数 ID 的祖先"""
        store = MemoryStore()
        manager = TreeManager(store)
        build_sample_tree(manager)
        a_copy = manager.copy(fetch(store, 2)).root
        b_copy = manager.get_children(a_copy, filters={"name": "B"})[0]

        assert [a.id for a in manager.get_ancestors(b_copy)] == [1, a_copy.id]

    def test_get_parent(self, manager, sample_tree):
        assert manager.get_parent(sample_tree["B"]).id == 2
        assert manager.get_parent(sample_tree["R"]) is None

    def test_get_siblings(self, manager, sample_tree):
        assert _ids(manager.get_siblings(sample_tree["B"])) == [4]
        assert _ids(manager.get_siblings(sample_tree["R"])) == [5]

    def test_get_roots(self, manager, sample_tree):
        assert _ids(manager.get_roots()) == [1, 5]

    def test_is_ancestor_and_descendant(self, manager, sample_tree):
        r, b = sample_tree["R"], sample_tree["B"]
        assert manager.is_ancestor_of(r, b) is True
        assert manager.is_descendant_of(b, r) is True
        assert manager.is_descendant_of(r, b) is False


class TestRemove:
    """删除测试"""

    def test_remove_descendants(self, manager, memory_store, sample_tree):
        removed = manager.remove_descendants(sample_tree["R"])

        assert removed == 3
        assert _ids(memory_store.find(Criteria())) == [1, 5]

    def test_remove_descendants_with_filters(self, manager, memory_store, sample_tree):
        removed = manager.remove_descendants(sample_tree["A"], filters={"name": "B"})

        assert removed == 1
        assert _ids(memory_store.find(Criteria())) == [1, 2, 4, 5]

    def test_remove_subtree(self, manager, memory_store, sample_tree):
        removed = manager.remove_subtree(sample_tree["A"])

        assert removed == 3
        assert _ids(memory_store.find(Criteria())) == [1, 5]


class TestSubtreeForest:
    """子树森林测试"""

    def test_build_descendant_tree(self, manager, sample_tree):
        r = sample_tree["R"]
        forest = manager.build_descendant_tree(r)

        assert forest.roots == [r]
        [a] = forest.children(r)
        assert a.id == 2
        assert _ids(forest.children(a)) == [3, 4]

    def test_build_children_tree(self, manager, sample_tree):
        r = sample_tree["R"]
        forest = manager.build_children_tree(r)

        assert len(forest) == 2
        assert [c.id for c in forest.children(r)] == [2]

    def test_build_forest(self, manager, memory_store, sample_tree):
        forest = manager.build_forest(memory_store.find(Criteria()))
        assert sorted(root.id for root in forest.roots) == [1, 5]
        assert forest.depth() == 3
