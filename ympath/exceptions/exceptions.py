"""树形结构异常定义

定义物化路径引擎自身抛出的异常体系。

注意：存储层（SQLAlchemy、内存存储等）抛出的读写异常不会被包装或转换，
调用方看到的始终是存储的原生异常。
"""

import copy
from enum import Enum
from typing import Optional, List, Any, Dict, Union


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用。

    使用示例:
        from ympath import ErrorCode, TreeCycleError

        try:
            manager.attach(node, new_parent)
        except TreeCycleError as e:
            assert e.code == ErrorCode.TREE_CYCLE
    """

    # ==================== 通用错误 ====================
    BUSINESS_ERROR = "BUSINESS_ERROR"
    TREE_ERROR = "TREE_ERROR"

    # ==================== 结构相关 ====================
    TREE_CYCLE = "TREE_CYCLE"
    INVALID_PATH_SEGMENT = "INVALID_PATH_SEGMENT"
    PATH_PREFIX_MISMATCH = "PATH_PREFIX_MISMATCH"

    # ==================== 存储相关 ====================
    NODE_NOT_FOUND = "NODE_NOT_FOUND"
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"


# 类型别名，支持枚举和字符串
ErrorCodeType = Union[str, ErrorCode]


class BusinessException(Exception):
    """业务异常基类

    属性:
        message: 错误消息
        code: 错误代码（支持 ErrorCode 枚举或字符串）
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise BusinessException("操作失败", code=ErrorCode.BUSINESS_ERROR)

        raise BusinessException(
            message="节点移动失败",
            code=ErrorCode.TREE_CYCLE,
            node_id=12,
            parent_id=30,
        )
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.BUSINESS_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        """初始化业务异常

        Args:
            message: 错误消息
            code: 错误代码
            details: 详细错误信息列表
            **extra: 额外的上下文信息
        """
        self.message = message
        self.code = code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式

        Returns:
            包含异常信息的字典
        """
        return {
            "message": self.message,
            "code": self.code,
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r})"
        )


class TreeException(BusinessException):
    """树形结构异常基类

    引擎自身抛出的所有异常都继承此类，方便调用方统一捕获。
    """

    def __init__(
        self,
        message: str = "树形结构操作失败",
        code: ErrorCodeType = ErrorCode.TREE_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class TreeCycleError(TreeException):
    """循环引用异常

    将节点挂到自身或自身的子孙节点下时抛出。

    使用示例:
        raise TreeCycleError("不能将节点移动到其子孙节点下", node_id=1, parent_id=5)
    """

    def __init__(
        self,
        message: str = "不能将节点移动到自身或其子孙节点下",
        code: ErrorCodeType = ErrorCode.TREE_CYCLE,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class InvalidPathSegmentError(TreeException):
    """路径片段非法

    节点 ID 为空或包含路径分隔符时，无法作为路径片段编码。
    """

    def __init__(
        self,
        message: str = "节点ID无法作为路径片段",
        code: ErrorCodeType = ErrorCode.INVALID_PATH_SEGMENT,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class PathPrefixMismatchError(TreeException):
    """路径前缀不匹配

    重写路径前缀时，旧前缀不是目标路径的片段级前缀。
    """

    def __init__(
        self,
        message: str = "路径前缀不匹配",
        code: ErrorCodeType = ErrorCode.PATH_PREFIX_MISMATCH,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class NodeNotFoundError(TreeException):
    """节点不存在

    使用示例:
        raise NodeNotFoundError("复制后的根节点不存在", node_id="a3f5k9m2p7")
    """

    def __init__(
        self,
        message: str = "节点不存在",
        code: ErrorCodeType = ErrorCode.NODE_NOT_FOUND,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class StoreWriteError(TreeException):
    """存储写入失败

    由内存存储在违反约束（如主键重复）时抛出。
    SQLAlchemy 存储直接抛出其原生异常，不使用此类。
    """

    def __init__(
        self,
        message: str = "存储写入失败",
        code: ErrorCodeType = ErrorCode.STORE_WRITE_FAILED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class Err:
    """异常快捷创建类

    使用示例:
        from ympath import Err

        raise Err.cycle(node_id=1, parent_id=5)
        raise Err.not_found("节点不存在", node_id=42)
        raise Err.write_failed("主键重复", code=ErrorCode.DUPLICATE_ENTRY)
    """

    @staticmethod
    def cycle(message: str = "不能将节点移动到自身或其子孙节点下", **kwargs) -> TreeCycleError:
        """循环引用

        Args:
            message: 错误消息
            **kwargs: 额外参数（code, details, node_id 等）
        """
        return TreeCycleError(message, **kwargs)

    @staticmethod
    def invalid_segment(message: str = "节点ID无法作为路径片段", **kwargs) -> InvalidPathSegmentError:
        """路径片段非法"""
        return InvalidPathSegmentError(message, **kwargs)

    @staticmethod
    def prefix_mismatch(message: str = "路径前缀不匹配", **kwargs) -> PathPrefixMismatchError:
        """路径前缀不匹配"""
        return PathPrefixMismatchError(message, **kwargs)

    @staticmethod
    def not_found(message: str = "节点不存在", **kwargs) -> NodeNotFoundError:
        """节点不存在"""
        return NodeNotFoundError(message, **kwargs)

    @staticmethod
    def write_failed(message: str = "存储写入失败", **kwargs) -> StoreWriteError:
        """存储写入失败"""
        return StoreWriteError(message, **kwargs)


__all__ = [
    "ErrorCode",
    "ErrorCodeType",
    "BusinessException",
    "TreeException",
    "TreeCycleError",
    "InvalidPathSegmentError",
    "PathPrefixMismatchError",
    "NodeNotFoundError",
    "StoreWriteError",
    "Err",
]
