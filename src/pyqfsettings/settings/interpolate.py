# -*- encoding: utf-8 -*-
# @File   : interpolate.py
# @Time   : 2024/11/03 14:02:19
# @Author : Kariko Lin

import os
from collections.abc import Mapping
from re import Match
from re import compile as regex

VARIABLE_PATTERN = regex(r'\$\{(.+?)\}')


class Interpolator:
    """Replaces `${name}` with values of a variable source.

    - `\\${name}` (a backslash right before) is left untouched,
      backslash included.
    - unknown names are left as they are.
    - replacements are inserted literally and never scanned again.

    By default the source is a snapshot of `os.environ`,
    but any `str: str` mapping would do.
    """

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._vars: Mapping[str, str] = (
            dict(os.environ) if variables is None else variables)

    @property
    def variables(self) -> Mapping[str, str]:
        return self._vars

    @variables.setter
    def variables(self, value: Mapping[str, str]) -> None:
        self._vars = value

    def __replace(self, m: Match[str]) -> str:
        start = m.start()
        if start > 0 and m.string[start - 1] == '\\':
            return m.group(0)
        value = self._vars.get(m.group(1))
        return m.group(0) if value is None else str(value)

    def interpolate(self, value: str | None) -> str | None:
        if value is None or '$' not in value:
            return value
        return VARIABLE_PATTERN.sub(self.__replace, value)

    __call__ = interpolate
