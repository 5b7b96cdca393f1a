"""子树移动

attach / detach 会更新节点自身的路径和父节点ID，
并把所有子孙路径中旧的前缀替换为新的前缀。

物化路径模式说明：
    - 移动节点时需要更新所有子孙的路径
    - 子孙的写入作为一个批次并发执行，任何一次失败都会让操作失败，
      但已经成功的写入不会回滚
"""

from functools import partial
from typing import Any, List, Optional, TYPE_CHECKING

from ..exceptions import Err
from ..log import get_logger
from .batch import run_batch
from .query import SubtreeQuery

if TYPE_CHECKING:
    from ..store.base import BaseStore

logger = get_logger()


class SubtreeMover:
    """子树移动

    使用示例:
        mover = SubtreeMover(store)

        mover.attach(child, parent)               # 挂到 parent 下（同时重写子孙路径）
        mover.attach(leaf, parent, is_leaf=True)  # 已知没有子孙，跳过子孙查询
        mover.detach(child)                       # 变为根节点
    """

    def __init__(self, store: "BaseStore", query: SubtreeQuery = None):
        self.store = store
        self.settings = store.settings
        self.codec = store.codec
        self.query = query or SubtreeQuery(store)

    @property
    def max_workers(self) -> int:
        if not self.store.supports_concurrent_writes:
            return 1
        return self.settings.max_workers

    def _check_cycle(self, child: Any, parent: Any) -> None:
        """不能挂到自身或自身的子孙下"""
        if parent is None:
            return
        child_id = self.codec.get_id(child)
        if child_id is None:
            return
        parent_id = self.codec.get_id(parent)
        if parent_id == child_id or self.codec.is_ancestor_of(child, parent):
            raise Err.cycle(
                f"不能将节点 {child_id} 移动到 {parent_id} 下",
                node_id=child_id,
                parent_id=parent_id,
            )

    def attach(self, child: Any, parent: Any = None, is_leaf: bool = False) -> Any:
        """将 child 挂到 parent 下

        Args:
            child: 要移动的节点
            parent: 新父节点，None 表示成为根节点
            is_leaf: 调用方保证 child 没有子孙，跳过子孙查询

        Returns:
            保存后的 child

        Raises:
            TreeCycleError: parent 是 child 自身或其子孙
        """
        self._check_cycle(child, parent)

        new_path = self.codec.child_path(parent)
        new_parent_id = None if parent is None else self.codec.get_id(parent)

        # 尚未保存过的新节点不可能有子孙
        if is_leaf or self.codec.get_id(child) is None:
            self.codec.set_position(child, new_path, new_parent_id)
            return self.store.save(child)

        # 先用旧路径查出子孙，再修改任何字段
        old_path = self.codec.get_path(child)
        descendants = self.query.get_descendants(child)
        for descendant in descendants:
            self.codec.set_path(
                descendant,
                self.codec.rebase_path(self.codec.get_path(descendant), old_path, new_path),
            )
        self.codec.set_position(child, new_path, new_parent_id)

        records: List[Any] = [child] + descendants
        results = run_batch([partial(self.store.save, r) for r in records], self.max_workers)
        logger.info(
            f"移动节点: id={self.codec.get_id(child)}, parent={new_parent_id}, "
            f"path={old_path!r} -> {new_path!r}, descendants={len(descendants)}"
        )
        return results[0]

    def detach(self, child: Any) -> Any:
        """将 child 从父节点上摘下，成为根节点"""
        return self.attach(child, None)

    def rebuild_paths(self, roots: Optional[List[Any]] = None) -> int:
        """根据 parent_id 重建路径

        从根节点开始逐层向下，路径与父节点不一致的记录会被修正并保存。
        用于修复路径数据不一致的情况。

        Args:
            roots: 从这些节点开始重建，默认使用所有根节点

        Returns:
            更新的节点数量
        """
        if roots is None:
            roots = self.query.get_roots()

        changed: List[Any] = []
        for root in roots:
            if self.codec.get_parent_id(root) is None and self.codec.get_path(root):
                self.codec.set_path(root, "")
                changed.append(root)

        level = list(roots)
        seen = {self.codec.get_id(r) for r in level}
        while level:
            next_level = []
            for node in level:
                expected = self.codec.child_path(node)
                for child in self.query.get_children(node):
                    child_id = self.codec.get_id(child)
                    if child_id in seen:
                        continue
                    seen.add(child_id)
                    if self.codec.get_path(child) != expected:
                        self.codec.set_path(child, expected)
                        changed.append(child)
                    next_level.append(child)
            level = next_level

        run_batch([partial(self.store.save, r) for r in changed], self.max_workers)
        logger.info(f"重建路径: roots={len(roots)}, updated={len(changed)}")
        return len(changed)


__all__ = ["SubtreeMover"]
