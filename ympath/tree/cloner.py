"""子树复制

把以 root 为根的子树复制为一批新记录：
    - 新记录拥有新的 ID，树形结构与原子树一致
    - 复制出的根与原 root 挂在同一个父节点下（是兄弟，不是子节点）
    - 所有新记录通过一次批量插入写入，不会触发存储的逐条校验钩子
    - 返回从存储重新加载的根副本及其子树
"""

from collections import deque
from typing import Any, Callable, List, Optional, TYPE_CHECKING

from ..exceptions import Err
from ..log import get_logger
from .builder import Forest
from .criteria import Criteria
from .protocols import Cloneable
from .query import SubtreeQuery

if TYPE_CHECKING:
    from ..store.base import BaseStore

logger = get_logger()


class SubtreeCloner:
    """子树复制

    使用示例:
        cloner = SubtreeCloner(store)

        # 完整复制
        forest = cloner.copy(menu)
        menu_copy = forest.root

        # 跳过已停用的子节点（及其整棵子树），并自定义复制逻辑
        def clone_menu(node):
            copied = store.clone_record(node)
            copied.title = f"{node.title} (副本)"
            return copied

        forest = cloner.copy(
            menu,
            clone_fn=clone_menu,
            filter_child=lambda child: child.is_active,
        )
    """

    def __init__(self, store: "BaseStore", query: SubtreeQuery = None):
        self.store = store
        self.settings = store.settings
        self.codec = store.codec
        self.query = query or SubtreeQuery(store)

    def _default_clone(self, node: Any) -> Any:
        if isinstance(node, Cloneable):
            return node.clone()
        return self.store.clone_record(node)

    def _clone(self, node: Any, clone_fn: Callable[[Any], Any]) -> Any:
        copied = clone_fn(node)
        if self.codec.get_id(copied) is None:
            setattr(copied, self.settings.id_field, self.store.new_id())
        return copied

    def copy(
        self,
        root: Any,
        clone_fn: Optional[Callable[[Any], Any]] = None,
        filter_child: Optional[Callable[[Any], bool]] = None,
    ) -> Forest:
        """复制以 root 为根的子树

        Args:
            root: 要复制的子树根（不要求是存储中的根节点）
            clone_fn: 节点复制函数，默认使用 clone() 或存储的 clone_record()
            filter_child: 子节点过滤函数，返回 False 的子节点及其整棵子树不会被复制

        Returns:
            以重新加载的根副本为唯一根节点的 Forest

        Raises:
            NodeNotFoundError: 批量插入后无法重新加载根副本
        """
        clone_fn = clone_fn or self._default_clone
        source = self.query.build_descendant_tree(root)

        # 根副本保留原 root 的父节点和路径
        root_copy = self._clone(root, clone_fn)
        self.codec.set_position(root_copy, self.codec.get_path(root), self.codec.get_parent_id(root))

        copies: List[Any] = [root_copy]
        pending = deque([(root, root_copy)])
        while pending:
            original, copied_parent = pending.popleft()
            child_path = self.codec.child_path(copied_parent)
            copied_parent_id = self.codec.get_id(copied_parent)
            for child in source.children(original):
                if filter_child is not None and not filter_child(child):
                    continue
                child_copy = self._clone(child, clone_fn)
                self.codec.set_position(child_copy, child_path, copied_parent_id)
                copies.append(child_copy)
                pending.append((child, child_copy))

        self.store.insert_many(copies)
        root_copy_id = self.codec.get_id(root_copy)
        logger.info(
            f"复制子树: source={self.codec.get_id(root)}, copy={root_copy_id}, "
            f"source_nodes={len(source)}, copied={len(copies)}"
        )

        reloaded = self.store.find_one(Criteria(equals={self.settings.id_field: root_copy_id}))
        if reloaded is None:
            raise Err.not_found(f"复制后的根节点不存在: {root_copy_id}", node_id=root_copy_id)
        return self.query.build_descendant_tree(reloaded)


__all__ = ["SubtreeCloner"]
