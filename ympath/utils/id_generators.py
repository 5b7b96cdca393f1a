"""
主键生成器函数

复制子树时，新节点的 ID 必须在写入前确定（子节点的路径引用父节点 ID），
因此由客户端生成：
- 短UUID（字符串主键）
- 雪花算法（整数主键）
"""

import base64
import threading
import time
import uuid
from typing import Optional


def generate_short_uuid(length: int = 10) -> str:
    """生成短UUID（可配置长度）

    使用base32编码压缩UUID，只包含小写字母和数字，不会与路径分隔符冲突。

    Args:
        length: 生成的短UUID长度（8-26位），默认10位

    Returns:
        str: 短UUID字符串

    Examples:
        >>> len(generate_short_uuid(10))
        10
    """
    uuid_bytes = uuid.uuid4().bytes
    base32_str = base64.b32encode(uuid_bytes).decode('utf-8').rstrip('=')
    return base32_str[:length].lower()


class SnowflakeIDGenerator:
    """雪花算法ID生成器

    ID结构（64位）：
    - 1位：符号位（始终为0）
    - 41位：时间戳（毫秒级）
    - 5位：数据中心ID（0-31）
    - 5位：工作节点ID（0-31）
    - 12位：序列号（同一毫秒内可生成4096个ID）
    """

    # 起始时间戳（2020-01-01 00:00:00）
    EPOCH = 1577836800000

    WORKER_ID_BITS = 5
    DATACENTER_ID_BITS = 5
    SEQUENCE_BITS = 12

    MAX_WORKER_ID = (1 << WORKER_ID_BITS) - 1
    MAX_DATACENTER_ID = (1 << DATACENTER_ID_BITS) - 1
    MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1

    WORKER_ID_SHIFT = SEQUENCE_BITS
    DATACENTER_ID_SHIFT = SEQUENCE_BITS + WORKER_ID_BITS
    TIMESTAMP_SHIFT = SEQUENCE_BITS + WORKER_ID_BITS + DATACENTER_ID_BITS

    def __init__(self, worker_id: int = 1, datacenter_id: int = 1):
        """初始化雪花算法生成器

        Args:
            worker_id: 工作节点ID（0-31）
            datacenter_id: 数据中心ID（0-31）

        Raises:
            ValueError: 参数超出范围
        """
        if worker_id < 0 or worker_id > self.MAX_WORKER_ID:
            raise ValueError(
                f"worker_id必须在0-{self.MAX_WORKER_ID}之间，当前值: {worker_id}"
            )
        if datacenter_id < 0 or datacenter_id > self.MAX_DATACENTER_ID:
            raise ValueError(
                f"datacenter_id必须在0-{self.MAX_DATACENTER_ID}之间，当前值: {datacenter_id}"
            )

        self.worker_id = worker_id
        self.datacenter_id = datacenter_id
        self.sequence = 0
        self.last_timestamp = -1
        self.lock = threading.Lock()

    def _current_millis(self) -> int:
        return int(time.time() * 1000)

    def _wait_next_millis(self, last_timestamp: int) -> int:
        timestamp = self._current_millis()
        while timestamp <= last_timestamp:
            timestamp = self._current_millis()
        return timestamp

    def generate(self) -> int:
        """生成雪花算法ID

        Returns:
            int: 64位整数ID

        Raises:
            RuntimeError: 检测到时钟回拨
        """
        with self.lock:
            timestamp = self._current_millis()

            if timestamp < self.last_timestamp:
                raise RuntimeError(
                    f"时钟回拨检测：当前时间戳 {timestamp} 小于上次时间戳 {self.last_timestamp}"
                )

            if timestamp == self.last_timestamp:
                self.sequence = (self.sequence + 1) & self.MAX_SEQUENCE
                # 序列号溢出，等待下一毫秒
                if self.sequence == 0:
                    timestamp = self._wait_next_millis(self.last_timestamp)
            else:
                self.sequence = 0

            self.last_timestamp = timestamp

            return (
                ((timestamp - self.EPOCH) << self.TIMESTAMP_SHIFT) |
                (self.datacenter_id << self.DATACENTER_ID_SHIFT) |
                (self.worker_id << self.WORKER_ID_SHIFT) |
                self.sequence
            )


_snowflake_generator: Optional[SnowflakeIDGenerator] = None
_snowflake_lock = threading.Lock()


def get_snowflake_generator(worker_id: int = 1, datacenter_id: int = 1) -> SnowflakeIDGenerator:
    """获取雪花算法生成器实例（单例模式）"""
    global _snowflake_generator
    with _snowflake_lock:
        if _snowflake_generator is None:
            _snowflake_generator = SnowflakeIDGenerator(worker_id, datacenter_id)
    return _snowflake_generator


def generate_snowflake_id() -> int:
    """使用全局生成器生成雪花算法ID"""
    return get_snowflake_generator().generate()


__all__ = [
    "generate_short_uuid",
    "SnowflakeIDGenerator",
    "get_snowflake_generator",
    "generate_snowflake_id",
]
