"""存储查询条件

引擎向存储发出的查询只有三种基本条件，多个条件之间为 AND 关系：
- equals: 字段等值匹配
- path_prefix: 路径字段的片段级前缀匹配（包含相等）
- id_in: 主键属于给定集合
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence


@dataclass(frozen=True)
class Criteria:
    """查询条件

    使用示例:
        # parent_id == 5 AND status == "active"
        Criteria(equals={"parent_id": 5, "status": "active"})

        # 路径位于 "/1/5" 之下
        Criteria(path_prefix="/1/5")

        # 主键批量查询
        Criteria(id_in=[1, 5])
    """
    equals: Dict[str, Any] = field(default_factory=dict)
    path_prefix: Optional[str] = None
    id_in: Optional[Sequence[Any]] = None

    def merge(self, filters: Optional[Dict[str, Any]] = None) -> "Criteria":
        """追加等值条件，返回新的 Criteria"""
        if not filters:
            return self
        equals = dict(filters)
        # 引擎自身的条件优先，调用方不能覆盖
        equals.update(self.equals)
        return replace(self, equals=equals)

    @property
    def is_empty(self) -> bool:
        return not self.equals and self.path_prefix is None and self.id_in is None


__all__ = ["Criteria"]
