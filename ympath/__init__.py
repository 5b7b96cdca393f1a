"""
ympath - 物化路径树形结构引擎

提供基于物化路径的子树查询、移动、复制以及祖先树组装等功能
"""

from .version import __version__, __author__, __description__

# 导出配置
from .config import (
    TreeSettings,
    LoggingSettings,
    AppSettings,
    ConfigLoader,
    load_yaml_config,
)

# 导出异常
from .exceptions import (
    Err,
    ErrorCode,
    BusinessException,
    TreeException,
    TreeCycleError,
    InvalidPathSegmentError,
    PathPrefixMismatchError,
    NodeNotFoundError,
    StoreWriteError,
)

# 导出日志
from .log import (
    get_logger,
    setup_logger,
    setup_root_logger,
)

# 导出树形操作
from .tree import (
    HasId,
    HasMpath,
    HasParentId,
    Cloneable,
    TreeNode,
    PathCodec,
    Criteria,
    Forest,
    build_forest,
    run_batch,
    SubtreeQuery,
    SubtreeMover,
    AncestorAssembler,
    SubtreeCloner,
    TreeManager,
    path_columns,
    build_tree_fields_mixin,
    TreeFieldsMixin,
)

# 导出存储
from .store import (
    BaseStore,
    MemoryStore,
    ORMStore,
)

__all__ = [
    # 版本信息
    "__version__",
    "__author__",
    "__description__",

    # Config
    "TreeSettings",
    "LoggingSettings",
    "AppSettings",
    "ConfigLoader",
    "load_yaml_config",

    # Exceptions - 推荐使用
    "Err",                      # 异常快捷类：Err.cycle, Err.not_found 等
    "ErrorCode",
    # Exceptions - 高级用法
    "BusinessException",
    "TreeException",
    "TreeCycleError",
    "InvalidPathSegmentError",
    "PathPrefixMismatchError",
    "NodeNotFoundError",
    "StoreWriteError",

    # Log
    "get_logger",
    "setup_logger",
    "setup_root_logger",

    # Tree - 推荐使用
    "TreeManager",              # 门面：attach / detach / copy / build_*_tree
    # Tree - 组件
    "HasId",
    "HasMpath",
    "HasParentId",
    "Cloneable",
    "TreeNode",
    "PathCodec",
    "Criteria",
    "Forest",
    "build_forest",
    "run_batch",
    "SubtreeQuery",
    "SubtreeMover",
    "AncestorAssembler",
    "SubtreeCloner",
    "path_columns",
    "build_tree_fields_mixin",
    "TreeFieldsMixin",

    # Store
    "BaseStore",
    "MemoryStore",
    "ORMStore",
]
