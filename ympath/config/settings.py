"""
配置模块
提供树形引擎的默认配置，业务项目可以继承并覆盖
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class TreeSettings(BaseSettings):
    """树形结构配置

    显式描述一个实体类型的树形字段，构造引擎时传入，
    不会修改任何共享的模型元数据。

    使用示例:
        from ympath.config import TreeSettings

        # 默认字段名：id / mpath / parent_id
        settings = TreeSettings()

        # 自定义字段名
        settings = TreeSettings(
            path_field="tree_path",
            parent_field="parent_code",
            max_workers=4,
        )
    """
    id_field: str = Field(default="id", description="主键字段名")
    path_field: str = Field(default="mpath", description="物化路径字段名")
    parent_field: str = Field(default="parent_id", description="父节点ID字段名")
    separator: str = Field(default="/", description="路径分隔符（单个字符）")
    path_length: int = Field(default=500, description="路径字段最大长度")
    path_index: bool = Field(default=True, description="路径字段是否建索引")
    parent_index: bool = Field(default=True, description="父节点ID字段是否建索引")
    max_workers: int = Field(default=8, ge=1, description="批量写入的最大并发数")

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("路径分隔符必须是单个字符")
        return value

    class Config:
        env_prefix = "YMPATH_TREE_"


class LoggingSettings(BaseSettings):
    """日志配置

    使用示例:
        from ympath.config import LoggingSettings

        log_config = LoggingSettings(level="DEBUG", file_path="logs/tree.log")
    """
    level: str = Field(default="INFO", description="日志级别")
    file_path: str = Field(default="", description="日志文件路径，为空则不写文件")
    enable_console: bool = Field(default=True, description="是否启用控制台输出")

    class Config:
        env_prefix = "YMPATH_LOG_"


class AppSettings(BaseSettings):
    """应用基础配置

    聚合各子配置，支持 YAML 配置文件和环境变量两种方式。

    内置子配置及环境变量前缀:
        - tree:    TreeSettings    (YMPATH_TREE_)
        - logging: LoggingSettings (YMPATH_LOG_)

    YAML 配置示例 (config/settings.yaml):
        tree:
          path_field: "mpath"
          max_workers: 4
        logging:
          level: "DEBUG"
    """
    tree: TreeSettings = TreeSettings()
    logging: LoggingSettings = LoggingSettings()


__all__ = [
    "TreeSettings",
    "LoggingSettings",
    "AppSettings",
]
