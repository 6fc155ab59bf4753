"""
数据中心ID和机器ID的自分配
    - data_center_id: 优先使用配置(DATA_CENTER_ID)，解析失败或越界时随机分配
    - machine_id: 优先使用第一个网卡硬件地址的字节和取模，取不到时随机分配
任何失败都不会上抛，只会降级为随机值，保证生成器构造永远成功
"""
import enum
import os
import re
import secrets  # 使用加密安全的随机数生成器
from typing import NamedTuple, Optional

import psutil

from ksnowflake.common.god.logger import logger

DATA_CENTER_ID_BITS = 5
MACHINE_ID_BITS = 5

MAX_DATA_CENTER_ID = (1 << DATA_CENTER_ID_BITS) - 1
MAX_MACHINE_ID = (1 << MACHINE_ID_BITS) - 1

DATA_CENTER_ID_ENV = 'DATA_CENTER_ID'

# 只接受可选正负号加十进制数字, 不接受int()额外允许的首尾空白和下划线
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


class IdSource(str, enum.Enum):
    CONFIGURED = 'configured'
    HARDWARE = 'hardware'
    RANDOM = 'random'


class ResolvedId(NamedTuple):
    value: int
    source: IdSource


def resolve_data_center_id(override: Optional[str] = None) -> ResolvedId:
    """override为None时读取环境变量DATA_CENTER_ID"""
    if override is None:
        override = os.environ.get(DATA_CENTER_ID_ENV)

    if override is not None:
        if not isinstance(override, str) or not INTEGER_PATTERN.fullmatch(override):
            logger.warning(f'{DATA_CENTER_ID_ENV}={override!r} 不是整数，随机分配data_center_id')
        else:
            data_center_id = int(override)
            if 0 <= data_center_id <= MAX_DATA_CENTER_ID:
                return ResolvedId(data_center_id, IdSource.CONFIGURED)
            logger.warning(f'{DATA_CENTER_ID_ENV}={override!r} 超出范围[0, {MAX_DATA_CENTER_ID}]，随机分配data_center_id')

    return ResolvedId(secrets.randbelow(MAX_DATA_CENTER_ID + 1), IdSource.RANDOM)


def resolve_machine_id() -> ResolvedId:
    try:
        for name, addresses in psutil.net_if_addrs().items():
            for address in addresses:
                if address.family != psutil.AF_LINK:
                    continue
                mac = parse_hardware_address(address.address)
                if mac:
                    logger.debug(f'使用网卡{name}的硬件地址{address.address}计算machine_id')
                    return ResolvedId(sum(mac) % (MAX_MACHINE_ID + 1), IdSource.HARDWARE)
    except Exception as e:
        logger.warning(f'枚举网卡失败，随机分配machine_id: {e}')
    else:
        logger.debug('没有可用的网卡硬件地址，随机分配machine_id')

    return ResolvedId(secrets.randbelow(MAX_MACHINE_ID + 1), IdSource.RANDOM)


def parse_hardware_address(address: Optional[str]) -> Optional[bytes]:
    """
    解析'aa:bb:cc:dd:ee:ff'或'AA-BB-CC-DD-EE-FF'形式的硬件地址
    空地址、无法解析的地址以及全0地址(如loopback)返回None
    """
    if not address:
        return None
    try:
        mac = bytes(int(part, 16) for part in address.replace('-', ':').split(':'))
    except ValueError:
        return None
    if not any(mac):
        return None
    return mac
