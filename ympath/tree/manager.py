"""树形管理门面

把一个存储和一份 TreeSettings 接入所有组件，对外暴露全部树形操作。

使用示例:
    from ympath import TreeManager, MemoryStore

    tree = TreeManager(MemoryStore())

    root = tree.attach(Node(id=1))
    child = tree.attach(Node(id=2), root)

    tree.get_descendants(root)              # [child]
    tree.build_descendant_tree(root).root   # root
    tree.copy(root)                         # 复制整棵子树
    tree.detach(child)                      # child 成为根节点
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, TYPE_CHECKING

from .assembler import AncestorAssembler
from .builder import Forest, build_forest
from .cloner import SubtreeCloner
from .mover import SubtreeMover
from .query import SubtreeQuery

if TYPE_CHECKING:
    from ..store.base import BaseStore


class TreeManager:
    """树形管理门面

    各组件共享同一个存储、配置和路径编解码器。
    """

    def __init__(self, store: "BaseStore"):
        self.store = store
        self.settings = store.settings
        self.codec = store.codec
        self.query = SubtreeQuery(store)
        self.mover = SubtreeMover(store, self.query)
        self.assembler = AncestorAssembler(store)
        self.cloner = SubtreeCloner(store, self.query)

    # ==================== 路径 ====================

    def child_path(self, parent: Any = None) -> str:
        return self.codec.child_path(parent)

    def parse_ancestor_ids(self, mpath: Optional[str], cast: Optional[Callable[[str], Any]] = None) -> List[Any]:
        return self.codec.parse_ancestor_ids(mpath, cast=cast)

    def is_ancestor_of(self, ancestor: Any, node: Any) -> bool:
        """ancestor 是否为 node 的祖先（仅根据路径判断）"""
        return self.codec.is_ancestor_of(ancestor, node)

    def is_descendant_of(self, node: Any, ancestor: Any) -> bool:
        """node 是否为 ancestor 的子孙（仅根据路径判断）"""
        return self.codec.is_ancestor_of(ancestor, node)

    # ==================== 移动 ====================

    def attach(self, child: Any, parent: Any = None, is_leaf: bool = False) -> Any:
        return self.mover.attach(child, parent, is_leaf=is_leaf)

    def detach(self, child: Any) -> Any:
        return self.mover.detach(child)

    def rebuild_paths(self, roots: Optional[List[Any]] = None) -> int:
        return self.mover.rebuild_paths(roots)

    # ==================== 查询 ====================

    def get_descendants(
        self,
        root: Any,
        filters: Optional[Dict[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> List[Any]:
        return self.query.get_descendants(root, filters, fields)

    def get_children(
        self,
        root: Any,
        filters: Optional[Dict[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> List[Any]:
        return self.query.get_children(root, filters, fields)

    def get_ancestors(self, node: Any) -> List[Any]:
        return self.query.get_ancestors(node)

    def get_parent(self, node: Any) -> Optional[Any]:
        return self.query.get_parent(node)

    def get_siblings(self, node: Any, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        return self.query.get_siblings(node, filters)

    def get_roots(self, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        return self.query.get_roots(filters)

    def count_descendants(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> int:
        return self.query.count_descendants(root, filters)

    def count_children(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> int:
        return self.query.count_children(root, filters)

    def is_leaf(self, node: Any) -> bool:
        return self.query.is_leaf(node)

    # ==================== 删除 ====================

    def remove_descendants(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> int:
        return self.query.remove_descendants(root, filters)

    def remove_subtree(self, root: Any) -> int:
        return self.query.remove_subtree(root)

    # ==================== 树形结构 ====================

    def build_forest(self, nodes: Iterable[Any]) -> Forest:
        return build_forest(nodes, codec=self.codec)

    def build_descendant_tree(self, root: Any) -> Forest:
        return self.query.build_descendant_tree(root)

    def build_children_tree(self, root: Any) -> Forest:
        return self.query.build_children_tree(root)

    def build_ancestor_tree(self, documents: Any, forest: Optional[Forest] = None) -> Forest:
        return self.assembler.build_ancestor_tree(documents, forest)

    # ==================== 复制 ====================

    def copy(
        self,
        root: Any,
        clone_fn: Optional[Callable[[Any], Any]] = None,
        filter_child: Optional[Callable[[Any], bool]] = None,
    ) -> Forest:
        return self.cloner.copy(root, clone_fn=clone_fn, filter_child=filter_child)


__all__ = ["TreeManager"]
