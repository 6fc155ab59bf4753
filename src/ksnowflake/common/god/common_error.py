import i18n


class CommonError(object):
    """
    错误码
    说明:
    错误码用来区分需要不同处理方法的异常，如果处理方法相同，建议用同一错误码，不同的个性化错误详细信息(BusinessException.detail)
    [0]给调用方程序用来判断, [1]是i18n的key, 更多的是给内部开发者看, [2]是默认提示, 更多给外部用户看
    """
    CODE = 0
    SUCCESS = [0, 'ksnowflake.SUCCESS', 'success']
    UNKNOWN_ERROR = [CODE + 10000, 'ksnowflake.UNKNOWN_ERROR', '未知错误']
    PARAMETER_ERROR = [CODE + 10002, 'ksnowflake.PARAMETER_ERROR', '参数错误']
    CONFIG_ERROR = [CODE + 10004, 'ksnowflake.CONFIG_ERROR', '配置错误']


_TRANSLATIONS = {
    'en': {
        'ksnowflake.SUCCESS': 'success',
        'ksnowflake.UNKNOWN_ERROR': 'unknown error',
        'ksnowflake.PARAMETER_ERROR': 'parameter error',
        'ksnowflake.CONFIG_ERROR': 'configuration error',
    },
    'zh': {
        'ksnowflake.SUCCESS': '成功',
        'ksnowflake.UNKNOWN_ERROR': '未知错误',
        'ksnowflake.PARAMETER_ERROR': '参数错误',
        'ksnowflake.CONFIG_ERROR': '配置错误',
    },
}

for _locale, _messages in _TRANSLATIONS.items():
    for _key, _message in _messages.items():
        i18n.add_translation(_key, _message, locale=_locale)


def error_message(error: list, locale: str = None) -> str:
    """按locale翻译错误码, 没有翻译时使用错误码自带的默认提示"""
    if locale is None:
        locale = i18n.get('locale')
    return i18n.t(error[1], locale=locale, default=error[2])
