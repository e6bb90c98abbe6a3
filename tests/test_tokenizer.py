"""Tests for pyqfsettings.settings.tokenizer module."""

from io import StringIO

import pytest

from pyqfsettings import ConfigError
from pyqfsettings.settings.consts import TokenType
from pyqfsettings.settings.tokenizer import Token, Tokenizer


def lex(text: str) -> list[tuple[TokenType, str]]:
    return [(t.type, t.value) for t in Tokenizer(StringIO(text))]


class TestTokenizer:
    def test_section_and_pair(self):
        assert lex('[DEFAULT]\nKey1=Value1\n') == [
            (TokenType.SECTION, 'DEFAULT'),
            (TokenType.ID, 'Key1'),
            (TokenType.VALUE, 'Value1'),
        ]

    def test_empty_input(self):
        assert lex('') == []
        assert lex('   \n\t\n') == []

    def test_next_token_returns_none_at_end(self):
        tokenizer = Tokenizer(StringIO('A=1'))
        assert tokenizer.next_token() == Token(TokenType.ID, 'A')
        assert tokenizer.next_token() == Token(TokenType.VALUE, '1')
        assert tokenizer.next_token() is None
        assert tokenizer.next_token() is None

    def test_value_is_trimmed_but_key_is_not(self):
        assert lex('Key =   spaced value  \n') == [
            (TokenType.ID, 'Key '),
            (TokenType.VALUE, 'spaced value'),
        ]

    def test_empty_value(self):
        assert lex('Key=\nNext=1') == [
            (TokenType.ID, 'Key'),
            (TokenType.VALUE, ''),
            (TokenType.ID, 'Next'),
            (TokenType.VALUE, '1'),
        ]

    def test_comment_lines_are_skipped(self):
        assert lex('# first\n# second\nKey=V\n# last') == [
            (TokenType.ID, 'Key'),
            (TokenType.VALUE, 'V'),
        ]

    def test_many_comment_lines(self):
        text = '# c\n' * 5000 + 'Key=V\n'
        assert lex(text) == [(TokenType.ID, 'Key'), (TokenType.VALUE, 'V')]

    def test_hash_inside_value_is_not_a_comment(self):
        assert lex('Key=V # not a comment\n') == [
            (TokenType.ID, 'Key'),
            (TokenType.VALUE, 'V # not a comment'),
        ]

    def test_crlf_line_endings(self):
        assert lex('[SESSION]\r\nA=1\r\nB=2\r\n') == [
            (TokenType.SECTION, 'SESSION'),
            (TokenType.ID, 'A'),
            (TokenType.VALUE, '1'),
            (TokenType.ID, 'B'),
            (TokenType.VALUE, '2'),
        ]

    def test_stray_bracket_ends_input(self):
        assert lex('Key=V\n]\nOther=X\n') == [
            (TokenType.ID, 'Key'),
            (TokenType.VALUE, 'V'),
        ]

    def test_closing_bracket_is_not_checked(self):
        # whatever follows the label is skipped as if it were `]`.
        assert lex('[SESSION\n') == [(TokenType.SECTION, 'SESSION')]

    def test_spaces_inside_header_are_kept(self):
        assert lex('[ session ]') == [(TokenType.SECTION, 'session ')]

    def test_empty_header_is_malformed(self):
        with pytest.raises(ConfigError, match='malformed'):
            lex('[]\nKey=V')

    def test_header_at_end_of_input_is_malformed(self):
        with pytest.raises(ConfigError):
            lex('Key=V\n[')

    def test_nested_brackets_give_one_section(self):
        assert lex('[[DEFAULT]]\nA=1') == [
            (TokenType.SECTION, 'DEFAULT'),
            (TokenType.ID, 'A'),
            (TokenType.VALUE, '1'),
        ]

    def test_comment_inside_header(self):
        assert lex('[\n# note\nSESSION]') == [(TokenType.SECTION, 'SESSION')]

    def test_deeply_nested_header_is_malformed(self):
        with pytest.raises(ConfigError, match='malformed'):
            lex('[' * 5000)

    def test_leading_byte_order_mark_is_skipped(self):
        assert lex('\ufeff[DEFAULT]\nA=1') == [
            (TokenType.SECTION, 'DEFAULT'),
            (TokenType.ID, 'A'),
            (TokenType.VALUE, '1'),
        ]

    def test_high_characters_do_not_end_input(self):
        assert lex('Key=caf\u00ff\nNext=\uffff') == [
            (TokenType.ID, 'Key'),
            (TokenType.VALUE, 'caf\u00ff'),
            (TokenType.ID, 'Next'),
            (TokenType.VALUE, '\uffff'),
        ]

    def test_token_str(self):
        assert str(Token(TokenType.SECTION, 'DEFAULT')) == 'SECTION: DEFAULT'
