"""记录存储

- BaseStore: 存储抽象基类
- MemoryStore: 进程内存储（线程安全）
- ORMStore: SQLAlchemy 模型 + Session 存储

使用示例:
    from ympath.store import MemoryStore, ORMStore

    store = MemoryStore()
    store = ORMStore(Category, session)
"""

from .base import BaseStore
from .memory import MemoryStore
from .orm import ORMStore

__all__ = [
    "BaseStore",
    "MemoryStore",
    "ORMStore",
]
