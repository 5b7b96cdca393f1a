"""物化路径菜单树演示

本脚本演示 ympath 的常用操作：
1. 建立树（attach）
2. 查询子孙 / 子节点 / 祖先
3. 移动子树（子孙路径自动更新）
4. 复制子树
5. 组装祖先树并输出嵌套结构

运行方式：
    python demo_menu_tree.py
"""

import json

from sqlalchemy import Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from ympath import ORMStore, TreeFieldsMixin, TreeManager, setup_logger


# ==================== 模型定义 ====================

class Base(DeclarativeBase):
    pass


class Menu(Base, TreeFieldsMixin):
    __tablename__ = "demo_menu"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(100))

    def to_dict(self):
        return {"id": self.id, "title": self.title, "mpath": self.mpath}


# ==================== 辅助函数 ====================

def print_section(title: str):
    """打印章节标题"""
    print(f"\n{'='*70}")
    print(f"  {title}")
    print(f"{'='*70}\n")


def print_forest(forest):
    print(json.dumps(forest.to_dict_list(), ensure_ascii=False, indent=2))


# ==================== 主流程 ====================

def main():
    setup_logger("ympath", level="INFO")

    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        tree = TreeManager(ORMStore(Menu, session))

        print_section("1. 建立树")
        system = tree.attach(Menu(id=1, title="系统管理"))
        users = tree.attach(Menu(id=2, title="用户管理"), system)
        tree.attach(Menu(id=3, title="用户列表"), users, is_leaf=True)
        tree.attach(Menu(id=4, title="角色列表"), users, is_leaf=True)
        content = tree.attach(Menu(id=5, title="内容管理"))
        print_forest(tree.build_descendant_tree(system))

        print_section("2. 查询")
        print("系统管理的子孙:", [m.title for m in tree.get_descendants(system)])
        print("系统管理的子节点:", [m.title for m in tree.get_children(system)])
        role_list = tree.get_children(users, filters={"title": "角色列表"})[0]
        print("角色列表的祖先:", [m.title for m in tree.get_ancestors(role_list)])

        print_section("3. 移动：用户管理 -> 内容管理")
        tree.attach(users, content)
        print_forest(tree.build_descendant_tree(content))

        print_section("4. 复制：内容管理")
        copied = tree.copy(content, filter_child=lambda m: m.title != "角色列表")
        print_forest(copied)

        print_section("5. 祖先树")
        print_forest(tree.build_ancestor_tree(tree.get_descendants(content, filters={"title": "用户列表"})))


if __name__ == "__main__":
    main()
