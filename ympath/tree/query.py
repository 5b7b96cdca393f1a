"""子树查询

基于路径前缀和父节点等值条件的查询：
    - get_descendants: 路径以 child_path(root) 为片段级前缀的所有记录
    - get_children: parent_id == root.id 的记录（只有一层）
    - remove_descendants: 删除 get_descendants 会返回的同一批记录

查询结果的顺序由存储决定，不做排序保证。
"""

from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from ..log import get_logger
from .builder import Forest, build_forest
from .criteria import Criteria

if TYPE_CHECKING:
    from ..store.base import BaseStore

logger = get_logger()


class SubtreeQuery:
    """子树查询

    使用示例:
        query = SubtreeQuery(store)

        descendants = query.get_descendants(menu)
        active_children = query.get_children(menu, filters={"is_active": True})

        forest = query.build_descendant_tree(menu)
        assert forest.root is menu
    """

    def __init__(self, store: "BaseStore"):
        self.store = store
        self.settings = store.settings
        self.codec = store.codec

    # ==================== 查询条件 ====================

    def descendants_criteria(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> Criteria:
        return Criteria(path_prefix=self.codec.child_path(root)).merge(filters)

    def children_criteria(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> Criteria:
        return Criteria(
            equals={self.settings.parent_field: self.codec.get_id(root)}
        ).merge(filters)

    # ==================== 子孙 / 子节点 ====================

    def get_descendants(
        self,
        root: Any,
        filters: Optional[Dict[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> List[Any]:
        """获取所有子孙节点（不含 root 自身）

        Args:
            root: 子树根节点
            filters: 额外的等值条件（AND）
            fields: 只加载的字段（主键总会加载）

        Returns:
            子孙节点列表
        """
        descendants = self.store.find(self.descendants_criteria(root, filters), fields=fields)
        logger.debug(f"查询子孙节点: root={self.codec.get_id(root)}, count={len(descendants)}")
        return descendants

    def get_children(
        self,
        root: Any,
        filters: Optional[Dict[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> List[Any]:
        """获取直接子节点"""
        return self.store.find(self.children_criteria(root, filters), fields=fields)

    def remove_descendants(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> int:
        """删除所有子孙节点

        不做级联完整性检查，被其他数据引用的子孙是否可以删除由调用方负责。

        Returns:
            删除的记录数
        """
        removed = self.store.remove(self.descendants_criteria(root, filters))
        logger.info(f"删除子孙节点: root={self.codec.get_id(root)}, removed={removed}")
        return removed

    def remove_subtree(self, root: Any) -> int:
        """删除 root 及其所有子孙

        Returns:
            删除的记录数（包含 root）
        """
        removed = self.remove_descendants(root)
        removed += self.store.remove(
            Criteria(equals={self.settings.id_field: self.codec.get_id(root)})
        )
        return removed

    def count_descendants(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> int:
        return self.store.count(self.descendants_criteria(root, filters))

    def count_children(self, root: Any, filters: Optional[Dict[str, Any]] = None) -> int:
        return self.store.count(self.children_criteria(root, filters))

    def is_leaf(self, node: Any) -> bool:
        """判断是否为叶子节点（无子节点）"""
        return self.count_children(node) == 0

    # ==================== 树形结构 ====================

    def build_descendant_tree(self, root: Any) -> Forest:
        """获取 root 的完整子树

        Returns:
            以 root 为唯一根节点的 Forest
        """
        return build_forest([root] + self.get_descendants(root), codec=self.codec)

    def build_children_tree(self, root: Any) -> Forest:
        """获取 root 及其一层子节点"""
        return build_forest([root] + self.get_children(root), codec=self.codec)

    # ==================== 祖先 / 兄弟 ====================

    def get_ancestors(self, node: Any) -> List[Any]:
        """获取所有祖先节点

        Returns:
            祖先节点列表，从根节点开始排序
        """
        ancestor_ids = self.codec.parse_ancestor_ids(self.codec.get_path(node), cast=self.store.parse_id)
        if not ancestor_ids:
            return []

        ancestors = self.store.find(Criteria(id_in=ancestor_ids))
        order = {str(aid): index for index, aid in enumerate(ancestor_ids)}
        return sorted(ancestors, key=lambda a: order.get(str(self.codec.get_id(a)), len(order)))

    def get_parent(self, node: Any) -> Optional[Any]:
        """获取父节点，根节点返回 None"""
        parent_id = self.codec.get_parent_id(node)
        if parent_id is None:
            return None
        return self.store.find_one(Criteria(equals={self.settings.id_field: parent_id}))

    def get_siblings(self, node: Any, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        """获取兄弟节点（不包含自己）"""
        criteria = Criteria(
            equals={self.settings.parent_field: self.codec.get_parent_id(node)}
        ).merge(filters)
        node_id = self.codec.get_id(node)
        return [s for s in self.store.find(criteria) if self.codec.get_id(s) != node_id]

    def get_roots(self, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        """获取所有根节点"""
        return self.store.find(Criteria(equals={self.settings.parent_field: None}).merge(filters))


__all__ = ["SubtreeQuery"]
