"""物化路径字段定义

提供路径字段与父节点字段的 Mixin，字段名、长度和索引由 TreeSettings 决定。

使用示例:
    from sqlalchemy import Integer, String
    from sqlalchemy.orm import DeclarativeBase, mapped_column
    from ympath.tree import TreeFieldsMixin

    class Base(DeclarativeBase):
        pass

    class Category(Base, TreeFieldsMixin):
        __tablename__ = "category"

        id = mapped_column(Integer, primary_key=True)
        title = mapped_column(String(100))

        # mpath, parent_id 由 TreeFieldsMixin 自动提供

    # 主键类型决定复制时分配的新 ID（ORMStore 未指定 id_factory 时）：
    # - BigInteger：雪花ID，需要 64 位整数列，父节点列同样使用
    #   build_tree_fields_mixin(id_type=BigInteger)
    # - Integer：表中当前最大值递增，适合 32 位整数列
    # - 字符串：短UUID，列长度至少 10

    # 自定义字段名 / 字符串主键
    settings = TreeSettings(path_field="path", parent_field="parent")
    StrTreeFields = build_tree_fields_mixin(settings, id_type=String(36))
"""

from typing import Any, Dict

from sqlalchemy import Integer, String
from sqlalchemy.orm import mapped_column

from ..config import TreeSettings


def path_columns(settings: TreeSettings = None, id_type: Any = Integer) -> Dict[str, Any]:
    """按配置生成路径字段和父节点字段

    Args:
        settings: 树形配置，默认使用 TreeSettings()
        id_type: 父节点ID的列类型，需要与主键类型一致

    Returns:
        {路径字段名: mapped_column, 父节点字段名: mapped_column}
    """
    settings = settings or TreeSettings()
    return {
        # 根节点为 ""，其他节点为 "/<根ID>/.../<父ID>"
        settings.path_field: mapped_column(
            String(settings.path_length),
            nullable=False,
            default="",
            index=settings.path_index,
            comment="物化路径（从根到父节点的ID序列）",
        ),
        settings.parent_field: mapped_column(
            id_type,
            nullable=True,
            default=None,
            index=settings.parent_index,
            comment="父节点ID",
        ),
    }


def build_tree_fields_mixin(settings: TreeSettings = None, id_type: Any = Integer) -> type:
    """按配置生成树形字段 Mixin

    SQLAlchemy 会为每个继承该 Mixin 的模型复制一份字段定义。
    """
    attrs = {"__doc__": "物化路径字段 Mixin"}
    attrs.update(path_columns(settings, id_type))
    return type("TreeFieldsMixin", (), attrs)


TreeFieldsMixin = build_tree_fields_mixin()


__all__ = [
    "path_columns",
    "build_tree_fields_mixin",
    "TreeFieldsMixin",
]
