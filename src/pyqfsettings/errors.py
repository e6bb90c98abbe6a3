# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/11/02 21:40:12
# @Author : Kariko Lin


class ConfigError(Exception):
    """Settings are unusable: unknown session, missing key,
    or the source could not be loaded."""
    pass


# not a ConfigError: "missing" and "present but malformed" differ by type.
class FieldConvertError(Exception):
    """A setting exists but its text is not of the requested type."""
    pass


class InvalidParameterError(ValueError):
    """Caller input (like a reconnect interval) breaks its grammar."""
    pass
