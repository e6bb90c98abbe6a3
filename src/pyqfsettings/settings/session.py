# -*- encoding: utf-8 -*-
# @File   : session.py
# @Time   : 2024/11/02 22:10:31
# @Author : Kariko Lin

"""Session identity: the 8-field composite key of a `[SESSION]` block.

Text form (optional parts omitted when empty, from the right):

    BeginString:Sender[/SenderSub[/SenderLoc]]->Target[/Sub[/Loc]][:Qualifier]
"""

from collections.abc import Mapping
from dataclasses import KW_ONLY, dataclass, fields

from .consts import DEFAULT_BEGIN_STRING, SessionKey


def _joinparts(*parts: str) -> str:
    items = list(parts)
    while len(items) > 1 and not items[-1]:
        items.pop()
    return '/'.join(items)


def _splitparts(text: str) -> list[str]:
    items = text.split('/')
    if len(items) > 3:
        raise ValueError(f'too many "/" separated parts in "{text}"')
    return items + [''] * (3 - len(items))


@dataclass(frozen=True)
class SessionID:
    begin_string: str | None = ''
    sender_comp_id: str | None = ''
    target_comp_id: str | None = ''
    session_qualifier: str | None = ''
    _: KW_ONLY
    sender_sub_id: str | None = ''
    sender_location_id: str | None = ''
    target_sub_id: str | None = ''
    target_location_id: str | None = ''

    def __post_init__(self) -> None:
        # None and '' are the same identity.
        for f in fields(self):
            if getattr(self, f.name) is None:
                object.__setattr__(self, f.name, '')

    @classmethod
    def from_mapping(cls, pairs: Mapping[str, str]) -> 'SessionID':
        """Build the identity out of a (session) property bag."""
        return cls(
            pairs.get(SessionKey.BEGIN_STRING.value),
            pairs.get(SessionKey.SENDER_COMP_ID.value),
            pairs.get(SessionKey.TARGET_COMP_ID.value),
            pairs.get(SessionKey.SESSION_QUALIFIER.value),
            sender_sub_id=pairs.get(SessionKey.SENDER_SUB_ID.value),
            sender_location_id=pairs.get(SessionKey.SENDER_LOCATION_ID.value),
            target_sub_id=pairs.get(SessionKey.TARGET_SUB_ID.value),
            target_location_id=pairs.get(SessionKey.TARGET_LOCATION_ID.value))

    @classmethod
    def from_string(cls, text: str) -> 'SessionID':
        if '->' not in text:
            raise ValueError(f'"{text}" is not a session id: missing "->"')
        sender, target = text.split('->', 1)
        if ':' not in sender:
            raise ValueError(
                f'"{text}" is not a session id: missing begin string')
        begin, sender = sender.split(':', 1)
        qualifier = ''
        if ':' in target:
            target, qualifier = target.split(':', 1)
        s_comp, s_sub, s_loc = _splitparts(sender)
        t_comp, t_sub, t_loc = _splitparts(target)
        return cls(
            begin, s_comp, t_comp, qualifier,
            sender_sub_id=s_sub, sender_location_id=s_loc,
            target_sub_id=t_sub, target_location_id=t_loc)

    def to_dict(self) -> dict[str, str]:
        """The identity as the well-known keys, skipping empty ones."""
        ret = {
            SessionKey.BEGIN_STRING.value: self.begin_string,
            SessionKey.SENDER_COMP_ID.value: self.sender_comp_id,
            SessionKey.SENDER_SUB_ID.value: self.sender_sub_id,
            SessionKey.SENDER_LOCATION_ID.value: self.sender_location_id,
            SessionKey.TARGET_COMP_ID.value: self.target_comp_id,
            SessionKey.TARGET_SUB_ID.value: self.target_sub_id,
            SessionKey.TARGET_LOCATION_ID.value: self.target_location_id,
            SessionKey.SESSION_QUALIFIER.value: self.session_qualifier,
        }
        return {k: v for k, v in ret.items() if v}

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_SESSION_ID

    def __str__(self) -> str:
        ret = '%s:%s->%s' % (
            self.begin_string,
            _joinparts(self.sender_comp_id,
                       self.sender_sub_id,
                       self.sender_location_id),
            _joinparts(self.target_comp_id,
                       self.target_sub_id,
                       self.target_location_id))
        if self.session_qualifier:
            ret += f':{self.session_qualifier}'
        return ret


DEFAULT_SESSION_ID = SessionID(DEFAULT_BEGIN_STRING)
