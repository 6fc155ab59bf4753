from ksnowflake.common.god.common_error import CommonError, error_message


class BusinessException(Exception):
    """携带CommonError错误码的业务异常"""

    def __init__(self, error: list = CommonError.UNKNOWN_ERROR, detail: str = None):
        self.error = error
        self.code = error[0]
        self.detail = detail
        super().__init__(self.message())

    def message(self, locale: str = None) -> str:
        text = error_message(self.error, locale)
        if self.detail:
            return f'{text}: {self.detail}'
        return text

    def to_dict(self) -> dict:
        return {'code': self.code, 'message': self.message(), 'detail': self.detail}
