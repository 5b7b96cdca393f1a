"""异常处理模块

提供树形结构引擎的异常类。

使用示例:
    from ympath import Err, TreeException

    try:
        manager.attach(node, parent)
    except TreeException as e:
        print(e.to_dict())
"""

from .exceptions import (
    # ===== 推荐使用 =====
    Err,                            # 异常快捷创建类
    ErrorCode,                      # 错误代码枚举
    ErrorCodeType,

    # ===== 高级用法 =====
    BusinessException,
    TreeException,
    TreeCycleError,
    InvalidPathSegmentError,
    PathPrefixMismatchError,
    NodeNotFoundError,
    StoreWriteError,
)

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorCodeType",
    "BusinessException",
    "TreeException",
    "TreeCycleError",
    "InvalidPathSegmentError",
    "PathPrefixMismatchError",
    "NodeNotFoundError",
    "StoreWriteError",
]
