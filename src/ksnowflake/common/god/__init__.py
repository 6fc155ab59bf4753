"""
    所有模块全局变量
    全局变量必须是class，不能是简单类型
    重要!!同一进程内的默认雪花生成器必须全局唯一，否则同一毫秒内可能生成重复ID，所以只能通过cosmos.snowflake获取。
"""
import logging
import threading
from typing import Optional

from ksnowflake.common.conf.base_config import BaseConfig
from ksnowflake.common.god.ksnowflake import KSnowflake
from ksnowflake.common.god.logger import logger as package_logger


class Cosmos(object):
    config: BaseConfig

    def __init__(self):
        self.config = BaseConfig()
        self._snowflake: Optional[KSnowflake] = None
        self._log_handler: Optional[logging.Handler] = None
        self._lock = threading.Lock()

    def setup(self, config: BaseConfig, package: str = 'ksnowflake'):
        """
        安装配置并初始化日志，已创建的默认生成器会被丢弃，下次访问时按新配置重建
        重复调用时先移除上一次添加的日志handler，避免日志重复输出
        """
        with self._lock:
            self.config = config
            self._snowflake = None
            if self._log_handler is not None:
                package_logger.removeHandler(self._log_handler)
                self._log_handler.close()
            self._log_handler = config.init_logger(package)

    @property
    def snowflake(self) -> KSnowflake:
        if self._snowflake is None:
            with self._lock:
                if self._snowflake is None:
                    self._snowflake = KSnowflake(data_center_id=self.config.snowflake.data_center_id)
        return self._snowflake


global cosmos
# noinspection PyRedeclaration
cosmos = Cosmos()
