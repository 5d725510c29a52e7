import pytest

from stevie.setenv import DefinitionError, EnvTable, parse_definition, unescape


def test_blank_line_means_usage():
    assert parse_definition("") is None
    assert parse_definition("    ") is None


def test_unquoted_value_starts_right_after_equal_sign():
    assert parse_definition("PATH=c:\\bin") == ("PATH", "c:\\bin")
    assert parse_definition("  PATH = c:\\bin") == ("PATH", " c:\\bin")


def test_text_between_name_and_equal_sign_is_skipped():
    assert parse_definition("A junk=v") == ("A", "v")


@pytest.mark.parametrize("line", ["NAME", "NAME value", "   NAME  "])
def test_missing_equal_sign_is_an_error(line):
    with pytest.raises(DefinitionError):
        parse_definition(line)


def test_single_quotes_are_literal():
    assert parse_definition("X = 'a\\tb'  ") == ("X", "a\\tb")


def test_double_quotes_process_escapes():
    assert parse_definition('X="a\\tb\\n"') == ("X", "a\tb\n")


def test_escaped_quote_inside_double_quotes():
    assert unescape('say \\"hi\\""', '"') == 'say "hi"'


def test_octal_and_hex_constants():
    assert unescape('\\101"', '"') == "A"
    assert unescape('\\0x41"', '"') == "A"


def test_unknown_escape_keeps_character():
    assert unescape('\\q\\Z\\9"', '"') == "qZ9"


def test_unterminated_quote_is_an_error():
    with pytest.raises(DefinitionError):
        parse_definition('X="abc')


def test_text_after_closing_quote_is_an_error():
    with pytest.raises(DefinitionError):
        parse_definition("X='abc' extra")


def test_block_round_trip():
    block = b"PATH=c:\\bin\0PROMPT=$p$g\0\0"
    table = EnvTable.from_block(block)
    assert list(table) == [("PATH", "c:\\bin"), ("PROMPT", "$p$g")]
    assert table.to_block() == block


def test_get_is_case_blind():
    table = EnvTable.from_block(b"Path=x\0\0")
    assert table.get("PATH") == "x"
    assert table.get("missing") is None


def test_set_existing_keeps_name():
    table = EnvTable.from_block(b"Path=x\0\0")
    table.set("path", "y")
    assert list(table) == [("Path", "y")]


def test_set_new_upper_cases_name():
    table = EnvTable()
    table.set("editor", "stevie")
    assert table.get("EDITOR") == "stevie"
    assert list(table) == [("EDITOR", "stevie")]


def test_to_block_checks_capacity():
    table = EnvTable([("A", "1"), ("B", "2")])
    assert table.to_block(capacity=100) == b"A=1\0B=2\0\0"
    with pytest.raises(DefinitionError):
        table.to_block(capacity=table.size())


def test_size_matches_block_length():
    table = EnvTable([("NAME", "value"), ("X", "")])
    assert len(table.to_block()) == table.size() + 1


def test_format_lists_variables():
    table = EnvTable([("A", "1"), ("B", "two")])
    assert table.format() == "A=1\nB=two\n"