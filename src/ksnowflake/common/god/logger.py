import os
import sys
import logging
from typing import Annotated

# 设置ksnowflake日志
logger = logging.getLogger(__package__)

DEFAULT_FORMAT = '%(asctime)s - %(levelname)s - 进程%(process)d:线程%(thread)d - %(filename)s:%(funcName)s:%(lineno)d: %(message)s'


def init_logger(debug: Annotated[bool, 'debug模式'],
                package: Annotated[str, '包名'],
                level: Annotated[int, '日志级别'] = logging.INFO,
                logger_path: Annotated[str, '日志文件路径'] = None,
                _format: Annotated[str, '日志格式'] = DEFAULT_FORMAT) -> logging.Handler:
    logger.setLevel(level)
    formatter = logging.Formatter(fmt=_format)

    # Debug模式不输出日志文件
    if debug:
        handler = logging.StreamHandler(sys.stdout)
    else:
        # 如果logger_path为None或者为空字符串，使用当前目录
        if not logger_path:
            logger_path = os.path.join(os.getcwd(), f"{package}.log")
        else:
            logger_path = os.path.join(logger_path, f"{package}.log")

        # 确保日志文件所在的目录存在
        os.makedirs(os.path.dirname(logger_path), exist_ok=True)
        handler = logging.FileHandler(logger_path, encoding='utf-8')

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return handler
