"""Shared pytest fixtures for session settings tests."""

from io import StringIO

import pytest

from pyqfsettings import SessionID, SessionSettings

SAMPLE_SETTINGS = """\
# sample settings
[DEFAULT]
ConnectionType=initiator
HeartBtInt=30
SenderCompID=ME
ReconnectInterval=2x5;10

[SESSION]
BeginString=FIX.4.2
TargetCompID=THEM
HeartBtInt=60
DataDictionary=${DICT_DIR}/FIX42.xml

[SESSION]
BeginString=FIX.4.4
TargetCompID=OTHER
SessionQualifier=q1
ResetOnLogon=Y
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_SETTINGS


@pytest.fixture
def variables() -> dict[str, str]:
    return {'DICT_DIR': '/opt/dict'}


@pytest.fixture
def settings(sample_text, variables) -> SessionSettings:
    return SessionSettings.from_stream(StringIO(sample_text), variables)


@pytest.fixture
def fix42_id() -> SessionID:
    return SessionID('FIX.4.2', 'ME', 'THEM')


@pytest.fixture
def fix44_id() -> SessionID:
    return SessionID('FIX.4.4', 'ME', 'OTHER', 'q1')
