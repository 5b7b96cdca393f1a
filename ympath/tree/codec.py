"""物化路径编解码

路径格式说明：
    - 根节点的路径为空字符串 ""
    - 其他节点的路径是从根到父节点的 ID 序列，如 "/1/2"（不包含自身 ID）
    - 节点 R 的所有子孙，路径都以 child_path(R) 作为片段级前缀

所有前缀比较都按路径片段进行，"/12" 不是 "/120" 的前缀。

使用示例:
    from ympath.tree import PathCodec

    codec = PathCodec()
    codec.child_path(None)                     # ""
    codec.child_path(root)                     # "/1"
    codec.parse_ancestor_ids("/1/2")           # ["1", "2"]
    codec.parse_ancestor_ids("/1/2", cast=int) # [1, 2]
    codec.is_path_prefix("/12", "/120/5")      # False
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..config import TreeSettings
from ..exceptions import Err


class PathCodec:
    """物化路径编解码器

    纯函数集合，不访问存储。字段名与分隔符来自 TreeSettings。
    """

    def __init__(self, settings: TreeSettings = None):
        self.settings = settings or TreeSettings()
        self.separator = self.settings.separator

    # ==================== 字段访问 ====================

    def get_id(self, node: Any) -> Any:
        return getattr(node, self.settings.id_field)

    def get_path(self, node: Any) -> str:
        """读取节点路径，None 视为根路径"""
        return getattr(node, self.settings.path_field, None) or ""

    def get_parent_id(self, node: Any) -> Any:
        return getattr(node, self.settings.parent_field, None)

    def set_position(self, node: Any, mpath: str, parent_id: Any) -> None:
        """同时写入路径和父节点ID（两者必须一起更新）"""
        setattr(node, self.settings.path_field, mpath)
        setattr(node, self.settings.parent_field, parent_id)

    def set_path(self, node: Any, mpath: str) -> None:
        setattr(node, self.settings.path_field, mpath)

    # ==================== 编码 ====================

    def segment(self, node_id: Any) -> str:
        """将节点 ID 转换为路径片段

        Raises:
            InvalidPathSegmentError: ID 为空或包含分隔符
        """
        text = "" if node_id is None else str(node_id)
        if not text or self.separator in text:
            raise Err.invalid_segment(
                f"节点ID无法作为路径片段: {node_id!r}",
                node_id=node_id,
                separator=self.separator,
            )
        return text

    def child_path(self, parent: Any = None) -> str:
        """计算挂在 parent 下的子节点路径

        Args:
            parent: 父节点，None 表示子节点将成为根节点

        Returns:
            无父节点返回 ""；父节点是根时返回 "/<parent.id>"；
            否则返回 "<parent.mpath>/<parent.id>"
        """
        if parent is None:
            return ""
        return f"{self.get_path(parent)}{self.separator}{self.segment(self.get_id(parent))}"

    def join_path(self, segments: Sequence[str]) -> str:
        if not segments:
            return ""
        return self.separator + self.separator.join(segments)

    # ==================== 解码 ====================

    def split_path(self, mpath: Optional[str]) -> Tuple[str, ...]:
        """拆分路径为片段元组，丢弃开头的空片段"""
        if not mpath:
            return ()
        parts = mpath.split(self.separator)
        if parts[0] == "":
            parts = parts[1:]
        return tuple(parts)

    def parse_ancestor_ids(
        self,
        mpath: Optional[str],
        cast: Optional[Callable[[str], Any]] = None,
    ) -> List[Any]:
        """解析路径中的祖先 ID

        Args:
            mpath: 物化路径
            cast: ID 转换函数（如 int），为空则保留字符串

        Returns:
            从根到父节点的 ID 列表，根节点返回 []
        """
        segments = self.split_path(mpath)
        if cast is None:
            return list(segments)
        return [cast(s) for s in segments]

    def path_depth(self, mpath: Optional[str]) -> int:
        """路径中祖先的数量，根节点为 0"""
        return len(self.split_path(mpath))

    # ==================== 前缀比较 ====================

    def is_path_prefix(self, prefix: Optional[str], mpath: Optional[str]) -> bool:
        """判断 prefix 是否为 mpath 的片段级前缀（包含相等）"""
        prefix_segments = self.split_path(prefix)
        path_segments = self.split_path(mpath)
        if len(prefix_segments) > len(path_segments):
            return False
        return path_segments[:len(prefix_segments)] == prefix_segments

    def rebase_path(self, mpath: Optional[str], old_prefix: Optional[str], new_prefix: Optional[str]) -> str:
        """将 mpath 开头的 old_prefix 替换为 new_prefix

        只替换开头的完整片段，后面出现的相同文本不受影响。

        Raises:
            PathPrefixMismatchError: old_prefix 不是 mpath 的片段级前缀
        """
        if not self.is_path_prefix(old_prefix, mpath):
            raise Err.prefix_mismatch(
                f"路径 {mpath!r} 不以 {old_prefix!r} 开头",
                mpath=mpath,
                old_prefix=old_prefix,
            )
        old_segments = self.split_path(old_prefix)
        rest = self.split_path(mpath)[len(old_segments):]
        return self.join_path(self.split_path(new_prefix) + rest)

    # ==================== 节点关系 ====================

    def is_ancestor_of(self, ancestor: Any, node: Any) -> bool:
        """仅根据路径判断 ancestor 是否为 node 的祖先"""
        ancestor_key = str(self.get_id(ancestor))
        return ancestor_key in self.split_path(self.get_path(node))

    def is_root(self, node: Any) -> bool:
        return self.get_parent_id(node) is None and not self.get_path(node)


__all__ = ["PathCodec"]
