import logging

import pytest

from pyrtini import DEFAULT_SECTION, IniFormat, LineKind, loads
from pyrtini.ini.parser import classify_line

SAMPLE = """\
MapX=0
                                MapY=234
                                Misc2=
                                PlayerName=CHANGEME
                                Switch0=FALSE
                                Switch4= 67.3,54.2,1

                                [AnotherSection]
                                avagadro=6.022
                                thearr=34,67,89,92,1
"""


def test_classify_comment() -> None:
    line = classify_line('  ;  a note', 'Main')
    assert line.kind == LineKind.COMMENT
    assert line.section == 'Main'
    assert line.comment == '  a note'


def test_classify_section_with_comment() -> None:
    line = classify_line('[Main] ; first')
    assert line.kind == LineKind.SECTION
    assert line.section == 'Main'
    assert line.comment == ' first'


def test_classify_section_blank_comment() -> None:
    assert classify_line('[Main] ;   ').comment is None


def test_classify_rejects_empty_section_name() -> None:
    assert classify_line('[]') is None


def test_classify_ignores_noise() -> None:
    assert classify_line('') is None
    assert classify_line('   ') is None
    assert classify_line('just some words') is None
    assert classify_line('=orphan value') is None


def test_classify_pair() -> None:
    line = classify_line('Size = 1, 2 ;dims', 'Video')
    assert line.kind == LineKind.KEY_VALUE
    assert line.section == 'Video'
    assert line.key == 'Size'
    assert line.array == ['1', '2']
    assert line.comment == 'dims'


def test_key_with_space_is_truncated(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        line = classify_line('my key=5', lineno=7)
    assert line.key == 'my'
    assert line.value == '5'
    assert 'line 7' in caplog.text
    assert '"my key"' in caplog.text


def test_padded_key_is_not_a_truncation(
    caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        assert classify_line('key   = v').key == 'key'
    assert caplog.text == ''


def test_load_sample() -> None:
    doc = loads(SAMPLE)
    assert doc.get_int('mapy') == 234
    assert doc['misc2'] == ''
    assert doc.get('misc2', default='nothing') == 'nothing'
    assert doc.get_bool('switch0', default=True) is False
    assert doc['Switch4'] is None
    assert doc.get_array('Switch4') == ['67.3', '54.2', '1']
    assert doc.get_float_array('Switch4') == [67.3, 54.2, 1.0]
    assert doc.get_float('avagadro', 'anothersection') == 6.022
    assert doc.get_int_array('thearr', 'AnotherSection') == [34, 67, 89, 92, 1]
    assert doc.sections() == [DEFAULT_SECTION, 'AnotherSection']


def test_comment_stays_in_current_section() -> None:
    doc = loads('[A]\nx=1\n; about B\n[B]\ny=2\n')
    assert [i.kind for i in doc.lines('a')] == [
        LineKind.SECTION, LineKind.KEY_VALUE, LineKind.COMMENT]


def test_duplicate_header_merges_into_first() -> None:
    doc = loads('[A]\nx=1\n[B]\ny=2\n[a]\nz=3\n')
    assert doc.sections() == ['A', 'B']
    assert doc.keys('A') == ['x', 'z']
    assert sum(i.kind == LineKind.SECTION for i in doc.lines('A')) == 1


def test_leading_comments_before_first_header() -> None:
    doc = loads('; file header\n[Main]\nx=1\n')
    assert doc.sections() == [DEFAULT_SECTION, 'Main']
    assert doc.lines(DEFAULT_SECTION)[0].comment == ' file header'


def test_late_default_header_is_moved_above_first_pair() -> None:
    doc = loads('; lead\na=1\n[default]\nb=2\n')
    assert [i.kind for i in doc.lines()] == [
        LineKind.COMMENT, LineKind.SECTION,
        LineKind.KEY_VALUE, LineKind.KEY_VALUE]
    assert doc.keys() == ['a', 'b']


def test_custom_input_separator() -> None:
    doc = loads('[S]\nk: v\nurl: a=b\n', IniFormat(input_separator=':'))
    assert doc.get('k', 's') == 'v'
    assert doc.get('url', 's') == 'a=b'
