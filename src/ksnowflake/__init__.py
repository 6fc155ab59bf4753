from ksnowflake.common.god import cosmos
from ksnowflake.common.god.identity import IdSource
from ksnowflake.common.god.ksnowflake import KSnowflake
from ksnowflake.common.god.snowflake_id import SnowflakeId, EPOCH

__all__ = ['cosmos', 'IdSource', 'KSnowflake', 'SnowflakeId', 'EPOCH', 'gen_kid', 'parse_kid']


def gen_kid() -> int:
    """使用进程内默认生成器生成ID"""
    return cosmos.snowflake.gen_kid()


def parse_kid(kid: int) -> SnowflakeId:
    return SnowflakeId.from_kid(kid)
