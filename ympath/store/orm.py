"""ORM 记录存储

基于 SQLAlchemy 2.0 的记录存储，模型需要包含路径字段和父节点字段
（可以使用 TreeFieldsMixin 提供）。

使用示例:
    from sqlalchemy import create_engine
    from sqlalchemy.orm import Session
    from ympath.store import ORMStore

    engine = create_engine("sqlite:///tree.db")
    with Session(engine) as session:
        store = ORMStore(Category, session)
        manager = TreeManager(store)
        manager.attach(category, parent)

注意：Session 不能跨线程共享，因此该存储的批量写入按顺序执行。
"""

from typing import Any, Callable, Iterable, List, Optional, Type

from sqlalchemy import BigInteger, Integer, delete, func, insert, inspect, or_, select
from sqlalchemy.orm import Session, load_only

from ..config import TreeSettings
from ..log import get_logger
from ..tree.criteria import Criteria
from ..utils import generate_short_uuid, generate_snowflake_id
from .base import BaseStore

logger = get_logger()


class ORMStore(BaseStore):
    """基于 SQLAlchemy 模型和 Session 的记录存储

    - 路径前缀使用 `col == prefix OR col LIKE 'prefix/%'`，LIKE 通配符会被转义
    - 每次写入后提交（commit=False 时只 flush，由调用方控制事务）
    - 写入失败时回滚并原样抛出 SQLAlchemy 异常
    - 未指定 id_factory 时按主键类型分配新 ID：BigInteger 用雪花ID，
      Integer 用表中最大值递增，其他类型用短UUID

    Attributes:
        model: SQLAlchemy 模型类
        session: SQLAlchemy Session
        commit: 写入后是否提交
    """

    supports_concurrent_writes = False

    def __init__(
        self,
        model: Type,
        session: Session,
        settings: TreeSettings = None,
        id_factory: Callable[[], Any] = None,
        commit: bool = True,
    ):
        super().__init__(settings, id_factory)
        self.model = model
        self.session = session
        self.commit = commit
        self._mapper = inspect(model)
        pk_type = self._mapper.primary_key[0].type
        self._int_pk = isinstance(pk_type, Integer)
        self._last_int_id = 0
        if id_factory is None:
            # BigInteger 使用雪花ID，Integer 容纳不下雪花ID，按当前最大值递增
            if isinstance(pk_type, BigInteger):
                self.id_factory = generate_snowflake_id
            elif self._int_pk:
                self.id_factory = self._next_int_id
            else:
                self.id_factory = generate_short_uuid

    # ==================== 查询条件 ====================

    def _column(self, name: str) -> Any:
        return getattr(self.model, name)

    def _where(self, criteria: Criteria) -> List[Any]:
        clauses = []
        for field_name, value in criteria.equals.items():
            column = self._column(field_name)
            clauses.append(column.is_(None) if value is None else column == value)

        # 空前缀匹配所有记录
        if criteria.path_prefix:
            column = self._column(self.settings.path_field)
            prefix = criteria.path_prefix
            clauses.append(or_(
                column == prefix,
                column.startswith(prefix + self.settings.separator, autoescape=True),
            ))

        if criteria.id_in is not None:
            clauses.append(self._column(self.settings.id_field).in_(list(criteria.id_in)))
        return clauses

    def _next_int_id(self) -> int:
        """表中最大主键之后的下一个整数

        尚未写入的 ID 也会记住，同一批次内多次调用不会重复。
        """
        current = self.session.scalar(select(func.max(self._column(self.settings.id_field)))) or 0
        self._last_int_id = max(current, self._last_int_id) + 1
        return self._last_int_id

    def parse_id(self, segment: str) -> Any:
        """整数主键把路径片段转换为 int，其他类型保留字符串"""
        if self._int_pk:
            return int(segment)
        return segment

    def _finish(self) -> None:
        """提交或 flush，失败时回滚"""
        try:
            if self.commit:
                self.session.commit()
            else:
                self.session.flush()
        except Exception:
            self.session.rollback()
            raise

    # ==================== 读取 ====================

    def find(self, criteria: Criteria, fields: Optional[Iterable[str]] = None) -> List[Any]:
        stmt = select(self.model).where(*self._where(criteria))
        if fields is not None:
            # 主键由 load_only 自动加载
            columns = [self._column(f) for f in fields if f != self.settings.id_field]
            if columns:
                stmt = stmt.options(load_only(*columns))
        return list(self.session.scalars(stmt).all())

    def find_one(self, criteria: Criteria) -> Optional[Any]:
        stmt = select(self.model).where(*self._where(criteria)).limit(1)
        return self.session.scalars(stmt).first()

    def count(self, criteria: Criteria) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._where(criteria))
        return self.session.scalar(stmt) or 0

    # ==================== 写入 ====================

    def save(self, record: Any) -> Any:
        """保存记录

        非整数主键为空时在写入前分配 ID，整数主键交给数据库自增。
        """
        if self.codec.get_id(record) is None and not self._int_pk:
            setattr(record, self.settings.id_field, self.new_id())
        self.session.add(record)
        self._finish()
        return record

    def _to_row(self, record: Any) -> dict:
        """记录转为插入用的字典（值为 None 的字段交给数据库默认值）"""
        row = {}
        for attr in self._mapper.column_attrs:
            value = getattr(record, attr.key, None)
            if value is not None:
                row[attr.key] = value
        return row

    def insert_many(self, records: List[Any]) -> List[Any]:
        """批量插入（INSERT ... VALUES 多行，不经过 Session 的对象状态跟踪）"""
        if not records:
            return []
        for record in records:
            if self.codec.get_id(record) is None:
                setattr(record, self.settings.id_field, self.new_id())

        rows = [self._to_row(record) for record in records]
        try:
            self.session.execute(insert(self.model), rows)
        except Exception:
            self.session.rollback()
            raise
        self._finish()

        logger.debug(f"批量插入: table={self._mapper.local_table.name}, count={len(rows)}")
        return [row[self.settings.id_field] for row in rows]

    def remove(self, criteria: Criteria) -> int:
        stmt = (
            delete(self.model)
            .where(*self._where(criteria))
            .execution_options(synchronize_session="fetch")
        )
        try:
            result = self.session.execute(stmt)
        except Exception:
            self.session.rollback()
            raise
        self._finish()
        return result.rowcount

    def clone_record(self, record: Any) -> Any:
        """复制所有列字段到新的模型实例（主键除外），并分配新 ID"""
        primary_keys = {column.key for column in self._mapper.primary_key}
        values = {
            attr.key: getattr(record, attr.key)
            for attr in self._mapper.column_attrs
            if attr.key not in primary_keys
        }
        copied = self.model(**values)
        setattr(copied, self.settings.id_field, self.new_id())
        return copied


__all__ = ["ORMStore"]
