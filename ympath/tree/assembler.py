"""祖先树组装

给定若干节点，找出覆盖这些节点及其全部祖先的最少数量的树。

- 共享祖先的节点会合并到同一棵树中
- 只补全祖先，不会去查询祖先的其他子节点
- 如果传入了已经构建好的森林，节点在其中已知的子孙也会一并并入，
  不会为此发起新的查询
"""

from collections.abc import Iterable as IterableABC
from typing import Any, Iterable, List, Optional, TYPE_CHECKING

from ..log import get_logger
from .builder import Forest, build_forest
from .criteria import Criteria

if TYPE_CHECKING:
    from ..store.base import BaseStore

logger = get_logger()


class AncestorAssembler:
    """祖先树组装

    使用示例:
        assembler = AncestorAssembler(store)

        # B、C 拥有共同的祖先 A 和根 R，结果只有一棵以 R 为根的树
        forest = assembler.build_ancestor_tree([b, c])
        assert forest.roots == [r]

        # 把已经展开的子树一起并入
        subtree = query.build_descendant_tree(b)
        forest = assembler.build_ancestor_tree(b, forest=subtree)
    """

    def __init__(self, store: "BaseStore"):
        self.store = store
        self.settings = store.settings
        self.codec = store.codec

    def _as_list(self, documents: Any) -> List[Any]:
        """单个节点包装为列表，其他可迭代对象（生成器、dict.values() 等）展开"""
        if documents is None:
            return []
        if hasattr(documents, self.settings.id_field) or isinstance(documents, (str, bytes)):
            return [documents]
        if isinstance(documents, IterableABC):
            return list(documents)
        return [documents]

    def collect_ancestor_ids(self, documents: Iterable[Any]) -> List[Any]:
        """收集所有节点路径中的祖先 ID（去重，保持首次出现的顺序）"""
        ancestor_ids: List[Any] = []
        seen = set()
        for document in documents:
            mpath = self.codec.get_path(document)
            for ancestor_id in self.codec.parse_ancestor_ids(mpath, cast=self.store.parse_id):
                if ancestor_id not in seen:
                    seen.add(ancestor_id)
                    ancestor_ids.append(ancestor_id)
        return ancestor_ids

    def build_ancestor_tree(self, documents: Any, forest: Optional[Forest] = None) -> Forest:
        """构建覆盖 documents 及其祖先的森林

        Args:
            documents: 单个节点或节点的可迭代对象
            forest: 已构建的森林，documents 在其中的子孙会被并入

        Returns:
            Forest 实例，空输入返回空森林（不访问存储）
        """
        documents = self._as_list(documents)
        if not documents:
            return Forest(self.codec)

        known_descendants: List[Any] = []
        if forest is not None:
            for document in documents:
                if forest.has_node(document):
                    known_descendants.extend(forest.descendants(document))

        ancestor_ids = self.collect_ancestor_ids(documents)
        ancestors = self.store.find(Criteria(id_in=ancestor_ids)) if ancestor_ids else []
        logger.debug(
            f"组装祖先树: documents={len(documents)}, known_descendants={len(known_descendants)}, "
            f"ancestor_ids={len(ancestor_ids)}, fetched={len(ancestors)}"
        )

        return build_forest(documents + known_descendants + ancestors, codec=self.codec)


__all__ = ["AncestorAssembler"]
