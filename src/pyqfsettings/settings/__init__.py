# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 21:51:09
# @Author : Kariko Lin

from .consts import SessionKey, TokenType
from .convert import parse_reconnect_interval, parse_remote_addresses
from .interpolate import Interpolator
from .model import PropertyBag, SessionSettings
from .parser import SettingsFileParser, SettingsLoader
from .session import DEFAULT_SESSION_ID, SessionID
from .tokenizer import Token, Tokenizer
