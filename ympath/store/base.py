"""记录存储抽象基类

定义树形引擎访问记录的接口规范。
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Optional

from ..config import TreeSettings
from ..tree.codec import PathCodec
from ..tree.criteria import Criteria
from ..utils import generate_short_uuid


class BaseStore(ABC):
    """记录存储抽象基类

    定义记录存储的标准接口，所有存储实现都应继承此类。

    存储抛出的异常会原样传给调用方，引擎不会包装或重试。
    """

    # 是否允许多个线程同时写入（决定批量写入是否并发）
    supports_concurrent_writes: bool = True

    def __init__(self, settings: TreeSettings = None, id_factory: Callable[[], Any] = None):
        self.settings = settings or TreeSettings()
        self.codec = PathCodec(self.settings)
        self.id_factory = id_factory or generate_short_uuid

    @abstractmethod
    def find(self, criteria: Criteria, fields: Optional[Iterable[str]] = None) -> List[Any]:
        """查询记录

        Args:
            criteria: 查询条件
            fields: 只加载的字段（主键总会加载），为空加载全部字段

        Returns:
            记录列表，顺序由存储决定
        """
        pass

    @abstractmethod
    def find_one(self, criteria: Criteria) -> Optional[Any]:
        """查询单条记录，不存在返回 None"""
        pass

    @abstractmethod
    def remove(self, criteria: Criteria) -> int:
        """删除满足条件的记录

        Returns:
            删除的记录数
        """
        pass

    @abstractmethod
    def insert_many(self, records: List[Any]) -> List[Any]:
        """批量插入记录（不触发逐条保存的校验钩子）

        Returns:
            插入记录的 ID 列表
        """
        pass

    @abstractmethod
    def save(self, record: Any) -> Any:
        """保存单条记录（新增或更新）

        Returns:
            保存后的记录
        """
        pass

    @abstractmethod
    def clone_record(self, record: Any) -> Any:
        """浅复制记录，副本带有新的 ID"""
        pass

    def count(self, criteria: Criteria) -> int:
        """统计满足条件的记录数"""
        return len(self.find(criteria))

    def new_id(self) -> Any:
        """生成新的记录 ID"""
        return self.id_factory()

    def parse_id(self, segment: str) -> Any:
        """把路径片段转换为存储中的 ID 类型

        路径只保存 ID 的字符串形式，查询祖先前由存储决定如何还原。
        默认原样返回字符串。
        """
        return segment


__all__ = ["BaseStore"]
