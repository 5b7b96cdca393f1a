"""工具函数"""

from .id_generators import (
    generate_short_uuid,
    SnowflakeIDGenerator,
    get_snowflake_generator,
    generate_snowflake_id,
)

__all__ = [
    "generate_short_uuid",
    "SnowflakeIDGenerator",
    "get_snowflake_generator",
    "generate_snowflake_id",
]
