# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 21:30:26
# @Author : Kariko Lin

from .errors import ConfigError, FieldConvertError, InvalidParameterError
from .settings import (
    DEFAULT_SESSION_ID,
    Interpolator,
    PropertyBag,
    SessionID,
    SessionKey,
    SessionSettings,
    SettingsFileParser,
    parse_reconnect_interval,
    parse_remote_addresses
)

__all__ = [
    'ConfigError', 'FieldConvertError', 'InvalidParameterError',
    'SessionID', 'DEFAULT_SESSION_ID', 'SessionKey',
    'PropertyBag', 'SessionSettings', 'SettingsFileParser', 'Interpolator',
    'parse_reconnect_interval', 'parse_remote_addresses'
]
