"""Tests for writing session settings back to text."""

from io import BytesIO, StringIO

from pyqfsettings import SessionID, SessionSettings


def blocks(text: str) -> list[list[str]]:
    ret: list[list[str]] = []
    for line in text.splitlines():
        if line.startswith('['):
            ret.append([line])
        else:
            ret[-1].append(line)
    return ret


class TestWrite:
    def test_layout(self, settings):
        out = blocks(str(settings))
        assert out[0][0] == '[DEFAULT]'
        assert sorted(out[0][1:]) == [
            'ConnectionType=initiator',
            'HeartBtInt=30',
            'ReconnectInterval=2x5;10',
            'SenderCompID=ME',
        ]
        assert [b[0] for b in out[1:]] == ['[SESSION]'] * settings.size()

    def test_inherited_pairs_are_not_repeated(self, settings, fix44_id):
        for block in blocks(str(settings))[1:]:
            assert 'SenderCompID=ME' not in block
            assert 'ConnectionType=initiator' not in block
            if 'SessionQualifier=q1' in block:
                assert sorted(block[1:]) == [
                    'BeginString=FIX.4.4',
                    'ResetOnLogon=Y',
                    'SessionQualifier=q1',
                    'TargetCompID=OTHER',
                ]

    def test_overrides_are_written(self, settings):
        text = str(settings)
        assert 'HeartBtInt=60' in text
        assert 'DataDictionary=/opt/dict/FIX42.xml' in text

    def test_empty_settings(self):
        assert str(SessionSettings({})) == '[DEFAULT]\n'

    def test_write_to_text_and_binary_streams(self, settings):
        text, raw = StringIO(), BytesIO()
        settings.write(text)
        settings.write(raw)
        assert text.getvalue() == str(settings)
        assert raw.getvalue() == settings.to_bytes()

    def test_repr(self, settings):
        assert repr(settings) == '<SessionSettings { .sessions = 2 }>'


class TestRoundTrip:
    def test_effective_view_survives(self, settings):
        reloaded = SessionSettings.from_lines(
            str(settings).splitlines(), {})
        assert set(reloaded) == set(settings)
        assert reloaded.get() == settings.get()
        for sid in settings:
            assert reloaded.get(sid) == settings.get(sid)

    def test_programmatic_changes_survive(self, settings, fix42_id):
        new_id = SessionID('FIX.4.4', 'A', 'B')
        settings.set_string('BeginString', 'FIX.4.4', new_id)
        settings.set_string('SenderCompID', 'A', new_id)
        settings.set_string('TargetCompID', 'B', new_id)
        settings.set_bool('Flag', True, new_id)
        settings.set_long('HeartBtInt', 15)

        reloaded = SessionSettings.from_stream(
            BytesIO(settings.to_bytes()), {})
        assert reloaded.size() == 3
        assert reloaded.get_bool('Flag', new_id) is True
        assert reloaded.get_int('HeartBtInt', new_id) == 15
        assert reloaded.get_int('HeartBtInt', fix42_id) == 60

    def test_escaped_variables_survive(self):
        settings = SessionSettings.from_lines(
            ['[DEFAULT]', 'Path=\\${HOME}/x'], {'HOME': '/root'})
        reloaded = SessionSettings.from_lines(
            str(settings).splitlines(), {'HOME': '/root'})
        assert reloaded.get_string('Path') == '\\${HOME}/x'
