"""物化路径编解码测试

测试 PathCodec 的核心功能：
1. 子节点路径计算
2. 祖先 ID 解析
3. 片段级前缀比较与替换
4. 自定义字段名 / 分隔符
"""

import pytest

from ympath.config import TreeSettings
from ympath.exceptions import (
    ErrorCode,
    InvalidPathSegmentError,
    PathPrefixMismatchError,
)
from ympath.tree import PathCodec

from tests.helpers.tree_nodes import Node


@pytest.fixture
def codec():
    return PathCodec()


class TestChildPath:
    """子节点路径计算测试"""

    def test_no_parent_is_root_path(self, codec):
        """测试没有父节点时返回空路径"""
        assert codec.child_path(None) == ""
        assert codec.child_path() == ""

    def test_parent_is_root(self, codec):
        """测试父节点是根节点"""
        root = Node(id=1, mpath="")
        assert codec.child_path(root) == "/1"

    def test_nested_parent(self, codec):
        """测试多层路径"""
        parent = Node(id=7, mpath="/1/3")
        assert codec.child_path(parent) == "/1/3/7"

    def test_none_path_treated_as_root(self, codec):
        """测试路径为 None 的父节点视为根节点"""
        parent = Node(id=2, mpath=None)
        assert codec.child_path(parent) == "/2"

    def test_string_ids(self, codec):
        """测试字符串 ID"""
        parent = Node(id="b", mpath="/a")
        assert codec.child_path(parent) == "/a/b"

    def test_id_with_separator_rejected(self, codec):
        """测试包含分隔符的 ID 被拒绝"""
        with pytest.raises(InvalidPathSegmentError) as exc_info:
            codec.child_path(Node(id="a/b"))
        assert exc_info.value.code == ErrorCode.INVALID_PATH_SEGMENT
        assert exc_info.value.extra["node_id"] == "a/b"

    @pytest.mark.parametrize("bad_id", [None, ""])
    def test_empty_id_rejected(self, codec, bad_id):
        """测试空 ID 不能作为路径片段"""
        with pytest.raises(InvalidPathSegmentError):
            codec.segment(bad_id)


class TestParseAncestorIds:
    """祖先 ID 解析测试"""

    def test_root_path(self, codec):
        assert codec.parse_ancestor_ids("") == []
        assert codec.parse_ancestor_ids(None) == []

    def test_string_segments(self, codec):
        assert codec.parse_ancestor_ids("/1/2") == ["1", "2"]

    def test_cast(self, codec):
        assert codec.parse_ancestor_ids("/1/2/30", cast=int) == [1, 2, 30]

    def test_roundtrip_with_child_path(self, codec):
        """测试解析结果与构造路径时的祖先顺序一致"""
        root = Node(id=1)
        a = Node(id=2, mpath=codec.child_path(root), parent_id=1)
        b = Node(id=3, mpath=codec.child_path(a), parent_id=2)
        assert codec.parse_ancestor_ids(b.mpath, cast=int) == [1, 2]

    def test_path_depth(self, codec):
        assert codec.path_depth("") == 0
        assert codec.path_depth("/1") == 1
        assert codec.path_depth("/1/2/3") == 3


class TestPathPrefix:
    """片段级前缀测试"""

    def test_exact_prefix(self, codec):
        assert codec.is_path_prefix("/1", "/1/2") is True

    def test_equal_paths(self, codec):
        assert codec.is_path_prefix("/1/2", "/1/2") is True

    def test_text_prefix_is_not_segment_prefix(self, codec):
        """测试 "/12" 不是 "/120" 的前缀"""
        assert codec.is_path_prefix("/12", "/120") is False
        assert codec.is_path_prefix("/12", "/120/5") is False

    def test_longer_prefix(self, codec):
        assert codec.is_path_prefix("/1/2/3", "/1/2") is False

    def test_empty_prefix_matches_everything(self, codec):
        assert codec.is_path_prefix("", "/1/2") is True
        assert codec.is_path_prefix("", "") is True


class TestRebasePath:
    """路径前缀替换测试"""

    def test_move_under_other_root(self, codec):
        """测试把 /1/2 下的路径移到 /5/2 下"""
        assert codec.rebase_path("/1/2", "/1/2", "/5/2") == "/5/2"
        assert codec.rebase_path("/1/2/3", "/1/2", "/5/2") == "/5/2/3"

    def test_detach_to_root(self, codec):
        """测试节点成为根节点后子孙路径缩短"""
        assert codec.rebase_path("/1/2/3", "/1/2", "/2") == "/2/3"

    def test_only_leading_segments_replaced(self, codec):
        """测试只替换开头的片段，后面出现的相同片段不受影响"""
        assert codec.rebase_path("/1/2/1/2", "/1/2", "/9") == "/9/1/2"

    def test_prefix_mismatch(self, codec):
        with pytest.raises(PathPrefixMismatchError) as exc_info:
            codec.rebase_path("/120/5", "/12", "/7")
        assert exc_info.value.extra["old_prefix"] == "/12"


class TestNodeRelations:
    """节点关系测试"""

    def test_is_ancestor_of(self, codec):
        root = Node(id=1)
        grandchild = Node(id=3, mpath="/1/2", parent_id=2)
        assert codec.is_ancestor_of(root, grandchild) is True
        assert codec.is_ancestor_of(grandchild, root) is False

    def test_similar_ids_not_ancestor(self, codec):
        assert codec.is_ancestor_of(Node(id=12), Node(id=5, mpath="/120")) is False

    def test_is_root(self, codec):
        assert codec.is_root(Node(id=1)) is True
        assert codec.is_root(Node(id=2, mpath="/1", parent_id=1)) is False


class TestCustomSettings:
    """自定义字段名与分隔符测试"""

    def test_custom_fields(self):
        class Item:
            def __init__(self, code, tree_path="", parent_code=None):
                self.code = code
                self.tree_path = tree_path
                self.parent_code = parent_code

        codec = PathCodec(TreeSettings(id_field="code", path_field="tree_path", parent_field="parent_code"))
        parent = Item("a", tree_path="/r")
        child = Item("b")

        codec.set_position(child, codec.child_path(parent), codec.get_id(parent))

        assert child.tree_path == "/r/a"
        assert child.parent_code == "a"

    def test_custom_separator(self):
        codec = PathCodec(TreeSettings(separator="."))
        parent = Node(id=3, mpath=".1.2")
        assert codec.child_path(parent) == ".1.2.3"
        assert codec.parse_ancestor_ids(".1.2.3", cast=int) == [1, 2, 3]
