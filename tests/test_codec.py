from pyrtini.ini.codec import ParsedValue, format_value, parse_value, split_csv


def test_plain_scalar_is_trimmed() -> None:
    assert parse_value('   hello world  ') == ParsedValue(
        'hello world', None, None, None)


def test_csv_becomes_array() -> None:
    parsed = parse_value(' 67.3,54.2,1')
    assert parsed.value is None
    assert parsed.array == ['67.3', '54.2', '1']


def test_single_token_stays_scalar() -> None:
    assert split_csv('lonely') is None
    assert parse_value('lonely').array is None


def test_inline_comment_is_split_off() -> None:
    parsed = parse_value('a, b ; the rest, with commas')
    assert parsed.array == ['a', 'b']
    assert parsed.comment == ' the rest, with commas'


def test_empty_comment_is_dropped() -> None:
    assert parse_value('value ;').comment is None


def test_escaped_semicolon_is_part_of_value() -> None:
    parsed = parse_value(r'a\;b ;note')
    assert parsed.value == r'a\;b'
    assert parsed.comment == 'note'


def test_double_quotes_keep_commas_together() -> None:
    parsed = parse_value('"German, American, Japanese"')
    assert parsed == ParsedValue(
        'German, American, Japanese', None, None, '"')


def test_single_quotes_with_comment() -> None:
    parsed = parse_value("  'a; b, c'   ;why not")
    assert parsed.value == 'a; b, c'
    assert parsed.quote == "'"
    assert parsed.comment == 'why not'


def test_opening_quote_wins_over_quotes_in_comment() -> None:
    parsed = parse_value('\'x\' ; say "hi"')
    assert parsed.quote == "'"
    assert parsed.value == 'x'
    assert parsed.comment == ' say "hi"'


def test_lone_quote_is_not_quoting() -> None:
    parsed = parse_value('5" screen')
    assert parsed.quote is None
    assert parsed.value == '5" screen'


def test_never_fails_on_odd_input() -> None:
    assert parse_value('') == ParsedValue('', None, None, None)
    assert parse_value('short', 42) == ParsedValue('', None, None, None)
    assert parse_value(';only comment') == ParsedValue(
        '', None, 'only comment', None)


def test_offset_skips_the_key() -> None:
    assert parse_value('key=value', 4).value == 'value'


def test_format_value() -> None:
    assert format_value('x') == 'x'
    assert format_value(None, ['1', '2', '3']) == '1, 2, 3'
    assert format_value('a, b', None, '"') == '"a, b"'
    assert format_value(None) == ''


def test_quotes_in_comment_leave_value_alone() -> None:
    parsed = parse_value('5 ; the "big" one')
    assert parsed == ParsedValue('5', None, ' the "big" one', None)


def test_quoted_value_before_comment_still_counts() -> None:
    parsed = parse_value('x "a, b" ;note')
    assert parsed.quote == '"'
    assert parsed.value == 'a, b'
