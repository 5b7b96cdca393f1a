"""树形结构构建

将扁平的记录列表重建为森林。

节点之间的父子关系保存在 Forest 内部的索引中（节点 ID -> 父 ID / 子 ID 列表），
不会在记录对象上挂 children / parent 属性，记录本身保持原样。

使用示例:
    from ympath.tree import build_forest

    forest = build_forest(records)
    for root in forest.roots:
        for child in forest.children(root):
            ...

    # 转换为嵌套字典
    tree = forest.to_dict_list()
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from ..config import TreeSettings
from .codec import PathCodec


def _default_serializer(node: Any) -> Dict[str, Any]:
    """节点转字典：优先使用 to_dict()，否则取公开的实例属性"""
    to_dict = getattr(node, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {k: v for k, v in vars(node).items() if not k.startswith("_")}


class Forest:
    """森林（一组树）

    节点按 ID 保存在索引中，父子关系用 ID 引用表示。
    根节点和子节点都保持输入顺序，重复构建结果一致。
    """

    def __init__(self, codec: PathCodec = None):
        self.codec = codec or PathCodec()
        self._nodes: Dict[Any, Any] = {}
        self._parent: Dict[Any, Any] = {}
        self._children: Dict[Any, List[Any]] = {}
        self._roots: List[Any] = []

    # ==================== 基本访问 ====================

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._nodes.values())

    def __contains__(self, node_id: Any) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"Forest(nodes={len(self._nodes)}, roots={len(self._roots)})"

    def _key(self, node: Any) -> Any:
        return self.codec.get_id(node)

    @property
    def roots(self) -> List[Any]:
        """根节点列表（在本次输入中没有父节点的节点）"""
        return [self._nodes[k] for k in self._roots]

    @property
    def root(self) -> Optional[Any]:
        """第一个根节点，空森林返回 None

        子树查询构建的森林只有一个根，可以直接用该属性取回。
        """
        return self._nodes[self._roots[0]] if self._roots else None

    def get(self, node_id: Any) -> Optional[Any]:
        return self._nodes.get(node_id)

    def nodes(self) -> List[Any]:
        return list(self._nodes.values())

    def has_node(self, node: Any) -> bool:
        return self._key(node) in self._nodes

    # ==================== 关系查询 ====================

    def children(self, node: Any) -> List[Any]:
        """直接子节点"""
        return [self._nodes[k] for k in self._children.get(self._key(node), [])]

    def parent(self, node: Any) -> Optional[Any]:
        """父节点，根节点返回 None"""
        parent_key = self._parent.get(self._key(node))
        return None if parent_key is None else self._nodes[parent_key]

    def ancestors(self, node: Any) -> List[Any]:
        """森林内的祖先，从根到父节点排序"""
        result = []
        seen = {self._key(node)}
        key = self._parent.get(self._key(node))
        while key is not None and key not in seen:
            seen.add(key)
            result.append(self._nodes[key])
            key = self._parent.get(key)
        result.reverse()
        return result

    def descendants(self, node: Any) -> List[Any]:
        """森林内的所有子孙（先序遍历，不含自身）"""
        return list(self._walk_keys(self._key(node), include_self=False))

    def walk(self) -> Iterator[Any]:
        """先序遍历整片森林"""
        for root_key in self._roots:
            yield from self._walk_keys(root_key, include_self=True)

    def _walk_keys(self, start: Any, include_self: bool) -> Iterator[Any]:
        if include_self:
            seen, stack = set(), [start]
        else:
            seen, stack = {start}, list(reversed(self._children.get(start, [])))
        while stack:
            key = stack.pop()
            if key in seen:
                continue
            seen.add(key)
            yield self._nodes[key]
            stack.extend(reversed(self._children.get(key, [])))

    def depth(self) -> int:
        """森林最大深度，空森林为 0，只有根节点为 1"""
        max_depth = 0
        stack = [(k, 1) for k in self._roots]
        seen = set()
        while stack:
            key, level = stack.pop()
            if key in seen:
                continue
            seen.add(key)
            max_depth = max(max_depth, level)
            stack.extend((c, level + 1) for c in self._children.get(key, []))
        return max_depth

    # ==================== 输出 ====================

    def to_dict_list(
        self,
        serializer: Callable[[Any], Dict[str, Any]] = None,
        children_field: str = "children",
    ) -> List[Dict[str, Any]]:
        """转换为嵌套字典列表

        Args:
            serializer: 节点转字典函数，默认使用 to_dict() 或实例属性
            children_field: 子节点列表字段名

        Returns:
            嵌套的树形结构列表

        使用示例:
            forest.to_dict_list()
            # [{"id": 1, "mpath": "", "parent_id": None, "children": [...]}]
        """
        serializer = serializer or _default_serializer

        def convert(key: Any, seen: set) -> Dict[str, Any]:
            seen.add(key)
            data = dict(serializer(self._nodes[key]))
            data[children_field] = [
                convert(c, seen) for c in self._children.get(key, []) if c not in seen
            ]
            return data

        seen: set = set()
        return [convert(k, seen) for k in self._roots]


def build_forest(nodes: Iterable[Any], settings: TreeSettings = None, codec: PathCodec = None) -> Forest:
    """将扁平的节点列表构建为森林

    只使用传入的数据：父节点不在本次输入中的节点会成为根节点，
    不会为了补全结构去查询存储。

    Args:
        nodes: 扁平节点列表，每个节点有 ID 与父节点 ID
        settings: 树形配置（决定字段名）
        codec: 路径编解码器，传入时忽略 settings

    Returns:
        Forest 实例

    使用示例:
        forest = build_forest([root, child1, child2, grandchild])
        assert forest.roots == [root]
        assert forest.children(root) == [child1, child2]
    """
    forest = Forest(codec or PathCodec(settings))

    # 建立索引：同一 ID 以第一次出现的记录为准
    for node in nodes:
        key = forest._key(node)
        if key in forest._nodes:
            continue
        forest._nodes[key] = node
        forest._children[key] = []

    # 关联父子（父节点必须在本次输入中）
    for key, node in forest._nodes.items():
        parent_key = forest.codec.get_parent_id(node)
        if parent_key is None or parent_key == key or parent_key not in forest._nodes:
            continue
        forest._parent[key] = parent_key
        forest._children[parent_key].append(key)

    forest._roots = [k for k in forest._nodes if k not in forest._parent]
    return forest


__all__ = ["Forest", "build_forest"]
