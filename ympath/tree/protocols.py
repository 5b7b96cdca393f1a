"""树形节点能力协议

引擎只依赖节点具备的能力，不关心具体的实体类型：
- HasId: 拥有唯一标识
- HasMpath: 拥有物化路径
- HasParentId: 拥有父节点引用
- Cloneable: 能够复制出一个带新 ID 的独立副本

字段名由 TreeSettings 决定，下面的协议描述的是默认字段名
（id / mpath / parent_id）。
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class HasId(Protocol):
    """拥有唯一标识的记录"""
    id: Any


@runtime_checkable
class HasMpath(Protocol):
    """拥有物化路径的记录"""
    mpath: Optional[str]


@runtime_checkable
class HasParentId(Protocol):
    """拥有父节点引用的记录"""
    parent_id: Any


@runtime_checkable
class Cloneable(Protocol):
    """可复制的记录

    clone() 返回一个独立的新记录：字段浅拷贝，ID 为新值或 None（由存储分配）。
    子树复制时优先使用该方法，否则退回到存储的 clone_record()。
    """

    def clone(self) -> Any: ...


@runtime_checkable
class TreeNode(HasId, HasMpath, HasParentId, Protocol):
    """树形节点：同时具备 ID、路径和父节点引用"""


__all__ = [
    "HasId",
    "HasMpath",
    "HasParentId",
    "Cloneable",
    "TreeNode",
]
