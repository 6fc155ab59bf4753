"""
64位ID结构（高位到低位）：
    - 42位时间戳（相对EPOCH的毫秒数，约139年）
    - 5位data_center_id（0-31）
    - 5位machine_id（0-31）
    - 12位序列号（同一毫秒内的递增序号，0-4095）
"""
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, computed_field

from ksnowflake.common.god.business_exception import BusinessException
from ksnowflake.common.god.common_error import CommonError
from ksnowflake.common.god.identity import DATA_CENTER_ID_BITS, MACHINE_ID_BITS, MAX_DATA_CENTER_ID, \
    MAX_MACHINE_ID

EPOCH: int = 1704067200000  # UTC = 2024-01-01T00:00:00Z
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

TIMESTAMP_BITS = 42
SEQUENCE_BITS = 12

MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1
MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1
MAX_KID = (1 << 64) - 1

MACHINE_ID_SHIFT = SEQUENCE_BITS
DATA_CENTER_ID_SHIFT = SEQUENCE_BITS + MACHINE_ID_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + MACHINE_ID_BITS + DATA_CENTER_ID_BITS


class SnowflakeId(BaseModel):
    """解析后的ID各字段"""
    model_config = ConfigDict(frozen=True)

    kid: int
    timestamp: int  # 绝对毫秒时间戳（已加回EPOCH）
    data_center_id: int
    machine_id: int
    sequence: int

    @computed_field
    @property
    def created_at(self) -> datetime:
        return UNIX_EPOCH + timedelta(milliseconds=self.timestamp)

    @classmethod
    def from_kid(cls, kid: int) -> 'SnowflakeId':
        # bool也是int的子类，这里不接受
        if not isinstance(kid, int) or isinstance(kid, bool):
            raise BusinessException(CommonError.PARAMETER_ERROR, f'kid必须是整数: {kid!r}')
        if kid < 0 or kid > MAX_KID:
            raise BusinessException(CommonError.PARAMETER_ERROR, f'kid超出64位无符号整数范围: {kid}')

        return cls(kid=kid,
                   timestamp=((kid >> TIMESTAMP_SHIFT) & MAX_TIMESTAMP) + EPOCH,
                   data_center_id=(kid >> DATA_CENTER_ID_SHIFT) & MAX_DATA_CENTER_ID,
                   machine_id=(kid >> MACHINE_ID_SHIFT) & MAX_MACHINE_ID,
                   sequence=kid & MAX_SEQUENCE)
