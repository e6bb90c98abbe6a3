# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/11/02 21:52:47
# @Author : Kariko Lin

from enum import Enum


class SessionKey(str, Enum):
    """The 8 keys of a `[SESSION]` block that make up its identity."""
    BEGIN_STRING = 'BeginString'
    SENDER_COMP_ID = 'SenderCompID'
    SENDER_SUB_ID = 'SenderSubID'
    SENDER_LOCATION_ID = 'SenderLocationID'
    TARGET_COMP_ID = 'TargetCompID'
    TARGET_SUB_ID = 'TargetSubID'
    TARGET_LOCATION_ID = 'TargetLocationID'
    SESSION_QUALIFIER = 'SessionQualifier'


class SectionName(str, Enum):
    # compared case-insensitively.
    DEFAULT = 'default'
    SESSION = 'session'


class TokenType(int, Enum):
    ID = 2
    VALUE = 3
    SECTION = 4


class SectionState(Enum):
    """What the loader is currently filling.

    There is no member for unrecognized headers: those leave
    the state (and the target bag) exactly as they were.
    """
    NONE = 0
    DEFAULT = 1
    SESSION = 2


DEFAULT_BEGIN_STRING = 'DEFAULT'

# both ends a value; the tokenizer does not care about the platform.
NEWLINE = '\r\n'
LABEL_STOPS = '[]=#'
BOM = '\ufeff'

BOOL_TRUE = 'Y'
BOOL_FALSE = 'N'

RECONNECT_FORMAT = '[<multiplier>x]<seconds>;[<multiplier>x]<seconds>;...'
