import logging
import sys
from typing import TypeVar, Optional

import yaml

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ksnowflake.common.god.business_exception import BusinessException
from ksnowflake.common.god.common_error import CommonError
from ksnowflake.common.god.logger import init_logger, DEFAULT_FORMAT

# 根据 Python 版本选择日志级别映射方式
if sys.version_info >= (3, 11):
    # Python 3.11+ 使用内置方法
    def get_level_value(level_text: str) -> int:
        return logging.getLevelNamesMapping().get(level_text.upper(), 0)
else:
    # Python 3.10 及以下使用手动定义的字典
    LEVEL_MAPPING = {
        'NOTSET': 0,
        'DEBUG': 10,
        'INFO': 20,
        'WARNING': 30,
        'ERROR': 40,
        'CRITICAL': 50,
    }


    def get_level_value(level_text: str) -> int:
        return LEVEL_MAPPING.get(level_text.upper(), 0)


class GeneralConfig(BaseModel):
    debug: bool = False
    env: str = 'test'


class LoggingConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    level_text: str = Field(default='INFO', alias="level")  # 日志级别文本，如 "INFO"
    path: str = "logs"  # 日志文件目录

    @computed_field
    @property
    def level(self) -> int:
        """通过属性直接访问数值级别"""
        return get_level_value(self.level_text)


class SnowflakeConfig(BaseModel):
    # 不为None时覆盖环境变量DATA_CENTER_ID，解析失败或越界同样随机分配
    data_center_id: Optional[str] = None


# ---------------------------
# 顶层配置模型
# ---------------------------
T = TypeVar('T', bound='BaseConfig')


class BaseConfig(BaseModel):
    general: GeneralConfig = Field(default_factory=GeneralConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    snowflake: SnowflakeConfig = Field(default_factory=SnowflakeConfig)

    @classmethod
    def load_config(cls, file_path: str) -> T:
        """
        从YAML文件加载配置
        自动返回调用类的实例，子类无需重新实现
        """
        with open(file_path, "r", encoding="utf-8") as f:
            # 空文件返回默认配置
            try:
                yaml_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise BusinessException(CommonError.CONFIG_ERROR, f"YAML解析错误: {e}")

        if not isinstance(yaml_data, dict):
            raise BusinessException(CommonError.CONFIG_ERROR, f"YAML顶层必须是字典: {file_path}")
        return cls(**yaml_data)

    def init_logger(self, package: str, _format: str = DEFAULT_FORMAT):
        return init_logger(debug=self.general.debug,
                           package=package,
                           level=self.logging.level,
                           logger_path=self.logging.path,
                           _format=_format)
