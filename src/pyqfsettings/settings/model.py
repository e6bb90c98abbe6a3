# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/02 22:41:36
# @Author : Kariko Lin

"""
Session settings: one `[DEFAULT]` bag, inherited by every `[SESSION]` bag.

    ```ini
    [DEFAULT]
    ConnectionType=initiator
    HeartBtInt=30

    [SESSION]
    BeginString=FIX.4.2
    SenderCompID=ME
    TargetCompID=THEM
    # overrides the default one.
    HeartBtInt=${HEARTBEAT}
    ```

Note there are no trailing comments, `#` only starts one
where a key or a section header could start.

Inheritance is a *live* link, not a merged copy:
changing the default bag later shows through every session bag
that doesn't override the key itself.
"""

import logging
from collections.abc import Iterable, Mapping, MutableMapping
from io import BufferedIOBase, RawIOBase, StringIO
from threading import Lock, RLock
from typing import IO, Iterator
from warnings import warn

from ..errors import ConfigError
from .consts import SectionName
from .convert import (
    bool_to_str,
    convert_bool,
    convert_double,
    convert_int,
    convert_long
)
from .interpolate import Interpolator
from .session import DEFAULT_SESSION_ID, SessionID

_log = logging.getLogger(__name__)


class PropertyBag(MutableMapping[str, str]):
    """Key-value pairs of one section, with an optional fallback bag.

    Reads go to the bag itself first, then to the fallback (recursively).
    Writes and deletes only ever touch the bag itself.

    Single key reads and writes are thread safe. `clear()` followed by
    `update()` is NOT atomic: a concurrent reader may see the bag
    empty or half filled in between.
    """

    def __init__(
        self,
        pairs: Mapping[str, str] | None = None,
        fallback: 'PropertyBag | None' = None
    ) -> None:
        self._data: dict[str, str] = {}
        self.__fallback = fallback
        self.__lock = RLock()
        if pairs:
            self.update(pairs)

    @property
    def fallback(self) -> 'PropertyBag | None':
        return self.__fallback

    def get_property(self, key: str) -> str | None:
        """Like `self.get(key)`, without building a `KeyError` on a miss."""
        with self.__lock:
            if key in self._data:
                return self._data[key]
        if self.__fallback is not None:
            return self.__fallback.get_property(key)
        return None

    def own(self, key: str) -> str | None:
        """Value of the bag itself, the fallback is not consulted."""
        with self.__lock:
            return self._data.get(key)

    def local_keys(self) -> list[str]:
        with self.__lock:
            return list(self._data)

    def local_items(self) -> list[tuple[str, str]]:
        with self.__lock:
            return list(self._data.items())

    def __getitem__(self, key: str) -> str:
        value = self.get_property(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str) -> None:
        with self.__lock:
            self._data[key] = value

    def __delitem__(self, key: str) -> None:
        with self.__lock:
            del self._data[key]
        # keys of the fallback can't be deleted from here.
        if self.__fallback is not None and key in self.__fallback:
            warn(
                f'"{key}" is still defined in the fallback section, '
                'its value stays visible through this one.')

    def discard(self, key: str) -> str | None:
        """Drop `key` from the bag's own pairs if it is there, silently.

        Returns the dropped value.
        """
        with self.__lock:
            return self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.get_property(key) is not None

    def __len__(self) -> int:
        return len(self.to_dict())

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __repr__(self) -> str:
        return '<PropertyBag { .own = %d, .fallback = %s }>' % (
            len(self._data), self.__fallback is not None)

    def clear(self) -> None:
        # local pairs only, MutableMapping.clear() would popitem()
        # through the fallback forever.
        with self.__lock:
            self._data.clear()

    def replace(self, pairs: Mapping[str, str]) -> None:
        """Drop the bag's own pairs, then take `pairs`. Not atomic."""
        self.clear()
        self.update(pairs)

    def to_dict(self, include_defaults: bool = True) -> dict[str, str]:
        """Copy of the effective pairs (or of the bag's own pairs only)."""
        mrg = (self.__fallback.to_dict()
               if include_defaults and self.__fallback is not None
               else {})
        with self.__lock:
            mrg.update(self._data)
        return mrg


class SessionSettings:
    """Settings of many sessions, keyed by `SessionID`.

    All accessors take the key first and an optional `session_id`;
    leaving it out means the `[DEFAULT]` section.

    Values are interpolated (see `Interpolator`) when loaded
    and once more when read through `get_string()` and friends.
    """

    def __init__(self, variable_values: Mapping[str, str] | None = None):
        self.__sections: dict[SessionID, PropertyBag] = {
            DEFAULT_SESSION_ID: PropertyBag()
        }
        # guards structural changes only, plain lookups go without.
        self.__lock = Lock()
        self._interpolator = Interpolator(variable_values)

    # construction ---------------------------------------------------------

    @classmethod
    def from_file(
        cls, filename: str,
        variable_values: Mapping[str, str] | None = None,
        encoding: str | None = None, *,
        resource_package: str | None = None
    ) -> 'SessionSettings':
        from .parser import SettingsFileParser
        return SettingsFileParser(
            filename, encoding,
            variable_values=variable_values,
            resource_package=resource_package).read()

    @classmethod
    def from_stream(
        cls, stream: IO,
        variable_values: Mapping[str, str] | None = None,
        encoding: str | None = None
    ) -> 'SessionSettings':
        from .parser import SettingsFileParser
        return SettingsFileParser.readstream(
            stream, cls(variable_values), encoding)

    @classmethod
    def from_lines(
        cls, lines: Iterable[str],
        variable_values: Mapping[str, str] | None = None
    ) -> 'SessionSettings':
        from .parser import SettingsFileParser
        return SettingsFileParser.readlines(lines, cls(variable_values))

    # interpolation --------------------------------------------------------

    @property
    def variable_values(self) -> Mapping[str, str]:
        return self._interpolator.variables

    def set_variable_values(self, variable_values: Mapping[str, str]) -> None:
        self._interpolator.variables = variable_values

    def interpolate(self, value: str | None) -> str | None:
        return self._interpolator(value)

    # sections -------------------------------------------------------------

    def get_or_create_section(self, session_id: SessionID) -> PropertyBag:
        """The bag of `session_id`, created (once) if there isn't one."""
        bag = self.__sections.get(session_id)
        if bag is not None:
            return bag
        with self.__lock:
            return self.__sections.setdefault(
                session_id,
                PropertyBag(fallback=self.__sections[DEFAULT_SESSION_ID]))

    def put_section(self, session_id: SessionID, bag: PropertyBag) -> None:
        """Store `bag` under `session_id`, replacing any previous one."""
        if session_id == DEFAULT_SESSION_ID:
            raise ConfigError('The default section cannot be replaced')
        with self.__lock:
            self.__sections[session_id] = bag

    def get_session_properties(
        self,
        session_id: SessionID | None = None,
        include_defaults: bool = False
    ) -> PropertyBag | dict[str, str]:
        """The live bag of a session, or a merged copy
        if `include_defaults` is set."""
        bag = self.__sections.get(session_id or DEFAULT_SESSION_ID)
        if bag is None:
            raise ConfigError('Session not found')
        return bag.to_dict() if include_defaults else bag

    def get_default_properties(self) -> PropertyBag:
        return self.__sections[DEFAULT_SESSION_ID]

    def section_iterator(self) -> Iterator[SessionID]:
        """Every known session except the default one (a snapshot)."""
        with self.__lock:
            keys = [i for i in self.__sections if i != DEFAULT_SESSION_ID]
        return iter(keys)

    def size(self) -> int:
        # there is always a default section.
        return len(self.__sections) - 1

    def remove_section(self, session_id: SessionID) -> None:
        with self.__lock:
            if (session_id == DEFAULT_SESSION_ID
                    or session_id not in self.__sections):
                raise ConfigError('Session not found')
            del self.__sections[session_id]

    def remove_section_matching(self, key: str, value: str) -> SessionID:
        """Remove the first session whose *own* `key` equals `value`."""
        with self.__lock:
            for sid, bag in self.__sections.items():
                if sid != DEFAULT_SESSION_ID and bag.own(key) == value:
                    del self.__sections[sid]
                    return sid
        raise ConfigError('Session not found')

    def __iter__(self) -> Iterator[SessionID]:
        return self.section_iterator()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, session_id: object) -> bool:
        return (session_id != DEFAULT_SESSION_ID
                and session_id in self.__sections)

    # whole-section access -------------------------------------------------

    def get(self, session_id: SessionID | None = None) -> dict[str, str]:
        """Effective pairs of a section (default pairs included)."""
        return self.get_session_properties(session_id, True)

    def set(
        self, pairs: Mapping[str, str],
        session_id: SessionID | None = None
    ) -> None:
        """Replace the own pairs of a session with `pairs`.

        For the default section, `pairs` are merged instead (see
        `set_defaults()`), the default bag is never emptied.
        """
        if session_id is None or session_id == DEFAULT_SESSION_ID:
            self.set_defaults(pairs)
        else:
            self.get_or_create_section(session_id).replace(pairs)

    def set_defaults(self, pairs: Mapping[str, str]) -> None:
        """Add (or overwrite) default pairs, others are kept."""
        self.get_default_properties().update(pairs)

    # typed accessors ------------------------------------------------------

    def __visible(self, session_id: SessionID | None) -> PropertyBag:
        # unknown sessions only see the defaults, and are not created.
        bag = self.__sections.get(session_id or DEFAULT_SESSION_ID)
        return self.get_default_properties() if bag is None else bag

    def __lookup(self, key: str, session_id: SessionID | None) -> str | None:
        return self.interpolate(self.__visible(session_id).get_property(key))

    def is_setting(
        self, key: str, session_id: SessionID | None = None
    ) -> bool:
        """Whether `key` is visible from the session (defaults included)."""
        return key in self.__visible(session_id)

    def remove_setting(
        self, key: str, session_id: SessionID | None = None
    ) -> None:
        """Remove `key` from the session's own pairs.

        Never reaches into the default section, a default value of `key`
        shows through again. Unknown sessions and keys are ignored.
        """
        bag = self.__sections.get(session_id or DEFAULT_SESSION_ID)
        if bag is not None:
            bag.discard(key)

    def get_string(
        self, key: str, session_id: SessionID | None = None
    ) -> str:
        bag = self.get_session_properties(session_id)
        value = self.interpolate(bag.get_property(key))
        if value is None:
            raise ConfigError(f'{key} not defined')
        return value

    # the `*_or_default()` family never fails on a missing key,
    # nor on an unknown session (which then reads the defaults).
    def get_string_or_default(
        self, key: str, default: str,
        session_id: SessionID | None = None
    ) -> str:
        value = self.__lookup(key, session_id)
        return default if value is None else value

    def get_long(self, key: str, session_id: SessionID | None = None) -> int:
        return convert_long(self.get_string(key, session_id))

    def get_long_or_default(
        self, key: str, default: int,
        session_id: SessionID | None = None
    ) -> int:
        value = self.__lookup(key, session_id)
        return default if value is None else convert_long(value)

    def get_int(self, key: str, session_id: SessionID | None = None) -> int:
        return convert_int(self.get_string(key, session_id))

    def get_int_or_default(
        self, key: str, default: int,
        session_id: SessionID | None = None
    ) -> int:
        value = self.__lookup(key, session_id)
        return default if value is None else convert_int(value)

    def get_double(
        self, key: str, session_id: SessionID | None = None
    ) -> float:
        return convert_double(self.get_string(key, session_id))

    def get_double_or_default(
        self, key: str, default: float,
        session_id: SessionID | None = None
    ) -> float:
        value = self.__lookup(key, session_id)
        return default if value is None else convert_double(value)

    def get_bool(self, key: str, session_id: SessionID | None = None) -> bool:
        return convert_bool(self.get_string(key, session_id))

    def get_bool_or_default(
        self, key: str, default: bool,
        session_id: SessionID | None = None
    ) -> bool:
        value = self.__lookup(key, session_id)
        return default if value is None else convert_bool(value)

    def set_string(
        self, key: str, value: str, session_id: SessionID | None = None
    ) -> None:
        self.get_or_create_section(
            session_id or DEFAULT_SESSION_ID)[key] = value.strip()

    def set_long(
        self, key: str, value: int, session_id: SessionID | None = None
    ) -> None:
        self.get_or_create_section(
            session_id or DEFAULT_SESSION_ID)[key] = str(int(value))

    set_int = set_long

    def set_double(
        self, key: str, value: float, session_id: SessionID | None = None
    ) -> None:
        self.get_or_create_section(
            session_id or DEFAULT_SESSION_ID)[key] = str(float(value))

    def set_bool(
        self, key: str, value: bool, session_id: SessionID | None = None
    ) -> None:
        self.get_or_create_section(
            session_id or DEFAULT_SESSION_ID)[key] = bool_to_str(value)

    # output ---------------------------------------------------------------

    @staticmethod
    def __write_section(fp: IO[str], name: str, bag: PropertyBag) -> None:
        fp.write(f'[{name}]\n')
        for k, v in bag.local_items():
            fp.write(f'{k}={v}\n')

    def write(self, fp: IO, encoding: str = 'utf-8') -> None:
        """Write as settings text: `[DEFAULT]`, then every `[SESSION]`
        with its own pairs only (inherited ones are not repeated)."""
        if isinstance(fp, (RawIOBase, BufferedIOBase)):
            fp.write(self.to_bytes(encoding))
            return
        self.__write_section(
            fp, SectionName.DEFAULT.name, self.get_default_properties())
        for sid in self.section_iterator():
            bag = self.__sections.get(sid)
            if bag is None:
                _log.warning(f'Session {sid} removed while writing, skipped.')
                continue
            self.__write_section(fp, SectionName.SESSION.name, bag)

    def to_bytes(self, encoding: str = 'utf-8') -> bytes:
        return str(self).encode(encoding)

    def __str__(self) -> str:
        buf = StringIO()
        self.write(buf)
        return buf.getvalue()

    def __repr__(self) -> str:
        return f'<SessionSettings {{ .sessions = {self.size()} }}>'
