"""物化路径树形模块

提供基于物化路径的树形结构操作。

使用示例:
    from ympath.store import MemoryStore
    from ympath.tree import TreeManager

    tree = TreeManager(MemoryStore())
    tree.attach(child, parent)
    forest = tree.build_descendant_tree(parent)
"""

from .protocols import (
    HasId,
    HasMpath,
    HasParentId,
    Cloneable,
    TreeNode,
)
from .codec import PathCodec
from .criteria import Criteria
from .builder import Forest, build_forest
from .batch import run_batch
from .query import SubtreeQuery
from .mover import SubtreeMover
from .assembler import AncestorAssembler
from .cloner import SubtreeCloner
from .manager import TreeManager
from .fields import (
    path_columns,
    build_tree_fields_mixin,
    TreeFieldsMixin,
)

__all__ = [
    # 协议
    "HasId",
    "HasMpath",
    "HasParentId",
    "Cloneable",
    "TreeNode",
    # 路径与条件
    "PathCodec",
    "Criteria",
    # 森林
    "Forest",
    "build_forest",
    # 组件
    "run_batch",
    "SubtreeQuery",
    "SubtreeMover",
    "AncestorAssembler",
    "SubtreeCloner",
    "TreeManager",
    # 字段
    "path_columns",
    "build_tree_fields_mixin",
    "TreeFieldsMixin",
]
