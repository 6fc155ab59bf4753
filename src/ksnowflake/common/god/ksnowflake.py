import threading
import time
from typing import Callable, Optional, Tuple

from ksnowflake.common.god.identity import resolve_data_center_id, resolve_machine_id
from ksnowflake.common.god.logger import logger
from ksnowflake.common.god.snowflake_id import EPOCH, MAX_SEQUENCE, TIMESTAMP_SHIFT, DATA_CENTER_ID_SHIFT, \
    MACHINE_ID_SHIFT, SnowflakeId


class KSnowflake:
    """
    雪花算法实现类
    64位ID组成结构见snowflake_id模块：42位时间戳 | 5位data_center_id | 5位machine_id | 12位序列号

    - data_center_id/machine_id 构造时确定，之后不再变化
    - 同一实例生成的ID单调递增且不重复（多线程安全）
    - 时钟回拨时沿用上次的时间戳继续递增序列号，不会抛异常
    - 同一毫秒序列号用尽时自旋等待下一毫秒
    """

    def __init__(self, data_center_id: Optional[str] = None, clock: Optional[Callable[[], int]] = None):
        """
        :param data_center_id: 覆盖环境变量DATA_CENTER_ID的配置值，解析规则相同
        :param clock: 返回毫秒时间戳的时钟，默认使用系统时间
        """
        data_center = resolve_data_center_id(data_center_id)
        machine = resolve_machine_id()
        self.data_center_id: int = data_center.value
        self.data_center_source = data_center.source
        self.machine_id: int = machine.value
        self.machine_source = machine.source

        self._clock = clock or self._get_current_timestamp
        self.sequence = 0  # 同一毫秒内的序列号
        self.last_timestamp = -1  # 上次生成ID的时间戳
        self.lock = threading.Lock()  # 线程锁保证原子操作

        logger.info(f'雪花生成器初始化: data_center_id={self.data_center_id}({self.data_center_source.value}), '
                    f'machine_id={self.machine_id}({self.machine_source.value})')

    @staticmethod
    def _get_current_timestamp() -> int:
        """获取当前时间戳（毫秒）"""
        return int(time.time() * 1000)

    def _til_next_millis(self, last_timestamp: int) -> int:
        """等待下一毫秒"""
        timestamp = self._clock()
        while timestamp <= last_timestamp:
            timestamp = self._clock()
        return timestamp

    def next_tuple(self) -> Tuple[int, int]:
        """返回下一个(时间戳, 序列号)，按字典序严格递增"""
        with self.lock:
            timestamp = self._clock()

            # 时钟回拨: 沿用上次的时间戳
            if timestamp < self.last_timestamp:
                logger.warning(f'时钟回拨 {self.last_timestamp - timestamp} 毫秒')
                timestamp = self.last_timestamp

            # 同一毫秒内序列号递增
            if timestamp == self.last_timestamp:
                self.sequence = (self.sequence + 1) & MAX_SEQUENCE
                if self.sequence == 0:
                    # 当前毫秒序列号已满，等待下一毫秒
                    timestamp = self._til_next_millis(self.last_timestamp)
            else:
                # 不同毫秒重置序列号
                self.sequence = 0

            sequence = self.sequence
            self.last_timestamp = timestamp

        return timestamp, sequence

    def gen_kid(self) -> int:
        """生成唯一ID"""
        timestamp, sequence = self.next_tuple()
        # 组装64位ID
        return ((timestamp - EPOCH) << TIMESTAMP_SHIFT
                | self.data_center_id << DATA_CENTER_ID_SHIFT
                | self.machine_id << MACHINE_ID_SHIFT
                | sequence)

    @staticmethod
    def parse_kid(kid: int) -> SnowflakeId:
        return SnowflakeId.from_kid(kid)


# 使用示例
if __name__ == "__main__":
    snowflake = KSnowflake()
    last_ns = time.time_ns()
    my_set = set()
    for _ in range(100000):
        my_set.add(snowflake.gen_kid())
    print(snowflake.parse_kid(max(my_set)))
    print(f"{(time.time_ns() - last_ns) / 1_000_000}ms ==> {len(my_set)}")
