# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2024/11/03 15:20:44
# @Author : Kariko Lin

"""Field converters, plus the two mini-grammars settings values may carry."""

import logging
import socket
from ipaddress import IPv4Address, IPv6Address, ip_address
from re import compile as regex

from ..errors import FieldConvertError, InvalidParameterError
from .consts import BOOL_FALSE, BOOL_TRUE, RECONNECT_FORMAT

_log = logging.getLogger(__name__)

_INTEGER = regex(r'[+-]?\d+')
_DOUBLE = regex(r'[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?')
INT_RANGE = (-(1 << 31), (1 << 31) - 1)
LONG_RANGE = (-(1 << 63), (1 << 63) - 1)


def _parse_integer(text: str, bounds: tuple[int, int]) -> int:
    if not _INTEGER.fullmatch(text):
        raise FieldConvertError(f'invalid integral value: "{text}"')
    ret = int(text)
    if not bounds[0] <= ret <= bounds[1]:
        raise FieldConvertError(f'integral value out of range: "{text}"')
    return ret


def convert_int(text: str) -> int:
    return _parse_integer(text, INT_RANGE)


def convert_long(text: str) -> int:
    return _parse_integer(text, LONG_RANGE)


def convert_double(text: str) -> float:
    """Plain decimal or exponent notation, no `inf`, `nan` nor `_`."""
    if not _DOUBLE.fullmatch(text):
        raise FieldConvertError(f'invalid double value: "{text}"')
    return float(text)


def convert_bool(text: str) -> bool:
    """`Y`/`N` is what session settings write;
    `true`/`false` (any case) is accepted as well."""
    if text == BOOL_TRUE or text.lower() == 'true':
        return True
    if text == BOOL_FALSE or text.lower() == 'false':
        return False
    raise FieldConvertError(f'invalid boolean value: "{text}"')


def bool_to_str(value: bool) -> str:
    return BOOL_TRUE if value else BOOL_FALSE


def _split(text: str, sep: str) -> list[str]:
    # drops trailing empty fields, but a text without `sep` stays whole.
    if sep not in text:
        return [text]
    ret = text.split(sep)
    while ret and not ret[-1]:
        ret.pop()
    return ret


def parse_reconnect_interval(raw: str | None) -> list[int] | None:
    """Expand `"2x5;10"` to `[5, 5, 10]`.

    Note that the multiplier sign is chosen once for the whole input:
    if there is any `*`, then `x` is no longer a separator (and vice versa),
    so `"2x5;3*1"` is rejected.
    """
    if not raw:
        return None
    multiplier = '*' if '*' in raw else 'x'
    ret: list[int] = []
    for entry in _split(raw, ';'):
        times_secs = _split(entry, multiplier)
        try:
            if len(times_secs) > 1:
                times = convert_int(times_secs[0])
                secs = convert_int(times_secs[1])
            else:
                times = 1
                secs = convert_int(times_secs[0])
        except FieldConvertError as e:
            raise InvalidParameterError(
                f"Invalid number '{entry}' in '{raw}'. "
                f"Expected format: {RECONNECT_FORMAT}") from e
        ret.extend([secs] * times)
    return ret


def parse_remote_addresses(
    raw: str | None
) -> set[IPv4Address | IPv6Address] | None:
    """Resolve a comma separated host list.

    Hosts that fail to resolve are logged and skipped,
    so the result may well be empty.
    """
    if not raw:
        return None
    ret: set[IPv4Address | IPv6Address] = set()
    for host in raw.split(','):
        try:
            info = socket.getaddrinfo(host, None)
        except (socket.gaierror, UnicodeError) as e:
            _log.error(f'Ignored unknown host : {host} ({e})')
            continue
        # the first record, like a plain name lookup would give.
        ret.add(ip_address(info[0][4][0]))
    return ret
