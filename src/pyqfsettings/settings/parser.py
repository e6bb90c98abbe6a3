# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/03 11:58:20
# @Author : Kariko Lin

"""Loading settings text into a `SessionSettings`, and saving it back.

Loading rules worth knowing:
1. Only `[DEFAULT]` and `[SESSION]` (any case) open a section.
Any other header is *ignored*: pairs after it keep flowing
into whatever section was open before.

2. A `[SESSION]` is stored once it is complete (next header or end of
input), keyed by the `SessionID` built out of its own pairs
(defaults included), overwriting an earlier session with the same id.

3. Pairs before the first section header are dropped.
"""

import logging
import os
from collections.abc import Iterable, Mapping
from importlib import resources
from io import StringIO, TextIOBase
from typing import IO

from chardet import detect as guess_codec

from ..abstract import FileHandler
from ..errors import ConfigError
from .consts import BOM, SectionName, SectionState, TokenType
from .model import PropertyBag, SessionSettings
from .session import SessionID
from .tokenizer import Tokenizer

_log = logging.getLogger(__name__)


class SettingsLoader:
    """Drives a `Tokenizer` and fills a `SessionSettings` with sections."""

    def __init__(self, settings: SessionSettings) -> None:
        self._settings = settings
        self._state = SectionState.NONE
        self._section: PropertyBag | None = None

    def __commit(self) -> None:
        if self._state is not SectionState.SESSION or self._section is None:
            return
        sid = SessionID.from_mapping(self._section)
        self._settings.put_section(sid, self._section)
        _log.debug(f'Loaded session {sid}')

    def __open(self, label: str) -> None:
        match label.lower():
            case SectionName.DEFAULT.value:
                self._state = SectionState.DEFAULT
                self._section = self._settings.get_default_properties()
            case SectionName.SESSION.value:
                self._state = SectionState.SESSION
                self._section = PropertyBag(
                    fallback=self._settings.get_default_properties())
            case _:
                _log.debug(f'Ignored section header [{label}]')

    def load(self, stream: TextIOBase) -> SessionSettings:
        tokenizer = Tokenizer(stream)
        while (token := tokenizer.next_token()) is not None:
            if token.type is TokenType.SECTION:
                # committed even if the new header turns out unknown.
                self.__commit()
                self.__open(token.value)
            elif token.type is TokenType.ID:
                # whatever comes next is the value, even a section.
                value = tokenizer.next_token()
                if value is None:
                    break
                if self._section is not None:
                    self._section[token.value] = (
                        self._settings.interpolate(value.value))
        self.__commit()
        return self._settings


def _decode_bytes(raw: bytes, encoding: str | None = None) -> str:
    if encoding is not None:
        return raw.decode(encoding).removeprefix(BOM)
    try:
        # utf-8-sig also takes BOM-less utf-8.
        return raw.decode('utf-8-sig')
    except UnicodeDecodeError:
        pass

    codec = guess_codec(raw)
    if codec is None or (codec['confidence'] or 0) < 0.8:
        codec = {'encoding': 'latin-1'}
    # fallbacks
    try:
        return raw.decode(codec['encoding'] or 'latin-1').removeprefix(BOM)
    except (UnicodeDecodeError, LookupError):
        return raw.decode('latin-1')


class SettingsFileParser(FileHandler[SessionSettings]):
    def __init__(
        self,
        filename: str,
        encoding: str | None = None, *,
        variable_values: Mapping[str, str] | None = None,
        resource_package: str | None = None
    ) -> None:
        """`resource_package`: look for `filename` among the resources
        of that package before trying the file system."""
        super().__init__(filename, encoding)
        self._vars = variable_values
        self._package = resource_package

    @staticmethod
    def readstream(
        buf: IO,
        settings: SessionSettings | None = None,
        encoding: str | None = None
    ) -> SessionSettings:
        """Load from an open text (or binary) stream.

        A partially loaded `settings` is NOT rolled back on failure,
        pass a fresh one if that matters.
        """
        if settings is None:
            settings = SessionSettings()
        try:
            if not isinstance(buf, TextIOBase):
                data = buf.read()
                buf = StringIO(
                    data if isinstance(data, str)
                    else _decode_bytes(data, encoding))
            return SettingsLoader(settings).load(buf)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise ConfigError(f'Unable to load session settings: {e}') from e

    @staticmethod
    def readlines(
        lines: Iterable[str],
        settings: SessionSettings | None = None
    ) -> SessionSettings:
        return SettingsFileParser.readstream(
            StringIO(os.linesep.join(lines)), settings)

    def _read_raw(self) -> bytes:
        if self._package is not None:
            try:
                res = resources.files(self._package).joinpath(self._fn)
                if res.is_file():
                    return res.read_bytes()
            except (ModuleNotFoundError, TypeError, OSError):
                _log.debug(
                    f'{self._fn} is not a resource of {self._package}')
        try:
            with open(self._fn, 'rb') as fp:
                return fp.read()
        except OSError as e:
            raise ConfigError(f'{self._fn}: {e.strerror or e}') from e

    def read(self) -> SessionSettings:
        raw = self._read_raw()
        try:
            text = _decode_bytes(raw, self._codec)
        except (UnicodeDecodeError, LookupError) as e:
            raise ConfigError(f'{self._fn}: {e}') from e
        return self.readstream(StringIO(text), SessionSettings(self._vars))

    def write(self, instance: SessionSettings) -> None:
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            instance.write(fp)

    def __str__(self) -> str:
        return 'Session settings: ' + super().__str__()
