"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 数据库连接
- 内存存储与树形管理器
- 日志 / 配置缓存清理
"""

import itertools
import logging
from typing import Generator

import pytest

# SQLAlchemy
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def memory_engine():
    """创建内存数据库引擎

    使用 StaticPool 和 check_same_thread=False 确保：
    1. 所有操作使用同一个连接（StaticPool）
    2. 允许跨线程访问（check_same_thread=False）
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(memory_engine) -> Generator[Session, None, None]:
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=memory_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# ==================== 树形 Fixtures ====================

@pytest.fixture
def memory_store():
    """内存存储，自动分配的 ID 从 1000 开始递增"""
    from ympath.store import MemoryStore
    return MemoryStore(id_factory=itertools.count(1000).__next__)


@pytest.fixture
def manager(memory_store):
    """基于内存存储的树形管理器"""
    from ympath.tree import TreeManager
    return TreeManager(memory_store)


@pytest.fixture
def sample_tree(manager):
    """示例树：R(1) -> A(2) -> B(3), C(4)；R2(5)"""
    from tests.helpers.tree_nodes import build_sample_tree
    return build_sample_tree(manager)


# ==================== 清理 Fixtures ====================

@pytest.fixture
def clean_config_cache():
    """测试前后清空配置缓存"""
    from ympath.config import ConfigLoader
    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


@pytest.fixture
def restore_logger():
    """还原测试中修改过的日志器"""
    touched = {}

    def _remember(name):
        target = logging.getLogger(name) if name else logging.getLogger()
        if name not in touched:
            touched[name] = (target.level, list(target.handlers), target.propagate)
        return name

    yield _remember

    for name, (level, handlers, propagate) in touched.items():
        target = logging.getLogger(name) if name else logging.getLogger()
        for handler in target.handlers:
            if handler not in handlers:
                handler.close()
        target.handlers[:] = handlers
        target.setLevel(level)
        target.propagate = propagate
