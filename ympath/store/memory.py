"""内存记录存储

进程内的存储实现，适用于：
- 单元测试
- 不需要持久化的场景
- 作为新存储实现的参考

注意：应用重启后数据会丢失。
"""

import copy
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config import TreeSettings
from ..exceptions import Err, ErrorCode
from ..log import get_logger
from ..tree.criteria import Criteria
from .base import BaseStore

logger = get_logger()


class MemoryStore(BaseStore):
    """内存记录存储

    记录按 ID 保存为副本：
    - 写入时复制，调用方之后对原对象的修改不会影响存储
    - 读取时复制，调用方拿到的是独立的对象
    所有操作持有同一把锁，可以被批量写入并发调用。

    使用示例:
        store = MemoryStore(id_factory=itertools.count(1).__next__)

        store.save(Node(id=None, name="root"))   # 分配 ID 1
        store.find(Criteria(path_prefix="/1"))   # 1 的所有子孙
    """

    supports_concurrent_writes = True

    def __init__(self, settings: TreeSettings = None, id_factory: Callable[[], Any] = None):
        super().__init__(settings, id_factory)
        self._records: Dict[Any, Any] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ==================== 条件匹配 ====================

    def _matcher(self, criteria: Criteria) -> Callable[[Any], bool]:
        """把查询条件编译为判断函数

        id_in 按字符串形式比较，路径片段解析出的 "1" 可以匹配整数 ID 1。
        """
        id_keys = None
        if criteria.id_in is not None:
            id_keys = {str(value) for value in criteria.id_in}

        def matches(record: Any) -> bool:
            for field_name, value in criteria.equals.items():
                if getattr(record, field_name, None) != value:
                    return False
            if criteria.path_prefix is not None:
                if not self.codec.is_path_prefix(criteria.path_prefix, self.codec.get_path(record)):
                    return False
            if id_keys is not None:
                if str(self.codec.get_id(record)) not in id_keys:
                    return False
            return True

        return matches

    def _project(self, record: Any, fields: Optional[Iterable[str]]) -> Any:
        """复制记录，未选中的公开字段置为 None（主键总会保留）"""
        result = copy.copy(record)
        if fields is None:
            return result
        keep = set(fields) | {self.settings.id_field}
        for name in list(vars(result)):
            if not name.startswith("_") and name not in keep:
                setattr(result, name, None)
        return result

    # ==================== 读取 ====================

    def find(self, criteria: Criteria, fields: Optional[Iterable[str]] = None) -> List[Any]:
        matches = self._matcher(criteria)
        with self._lock:
            return [
                self._project(record, fields)
                for record in self._records.values()
                if matches(record)
            ]

    def find_one(self, criteria: Criteria) -> Optional[Any]:
        matches = self._matcher(criteria)
        with self._lock:
            for record in self._records.values():
                if matches(record):
                    return copy.copy(record)
        return None

    def count(self, criteria: Criteria) -> int:
        matches = self._matcher(criteria)
        with self._lock:
            return sum(1 for record in self._records.values() if matches(record))

    # ==================== 写入 ====================

    def save(self, record: Any) -> Any:
        """保存记录，ID 为空时自动分配"""
        with self._lock:
            if self.codec.get_id(record) is None:
                setattr(record, self.settings.id_field, self.new_id())
            self._records[self.codec.get_id(record)] = copy.copy(record)
        return record

    def insert_many(self, records: List[Any]) -> List[Any]:
        """批量插入

        Raises:
            StoreWriteError: ID 已存在或批次内重复（此时不会写入任何记录）
        """
        with self._lock:
            for record in records:
                if self.codec.get_id(record) is None:
                    setattr(record, self.settings.id_field, self.new_id())

            ids = [self.codec.get_id(record) for record in records]
            seen = set()
            for record_id in ids:
                if record_id in self._records or record_id in seen:
                    raise Err.write_failed(
                        f"记录ID重复: {record_id}",
                        code=ErrorCode.DUPLICATE_ENTRY,
                        record_id=record_id,
                    )
                seen.add(record_id)

            for record in records:
                self._records[self.codec.get_id(record)] = copy.copy(record)

        logger.debug(f"批量插入: count={len(ids)}")
        return ids

    def remove(self, criteria: Criteria) -> int:
        matches = self._matcher(criteria)
        with self._lock:
            keys = [key for key, record in self._records.items() if matches(record)]
            for key in keys:
                del self._records[key]
        return len(keys)

    def clone_record(self, record: Any) -> Any:
        copied = copy.copy(record)
        setattr(copied, self.settings.id_field, self.new_id())
        return copied

    def clear(self) -> None:
        """清空所有记录"""
        with self._lock:
            self._records.clear()


__all__ = ["MemoryStore"]
