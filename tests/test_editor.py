import io

import pytest

from stevie.buffer import ESC
from stevie.editor import Editor, Mode
from stevie.terminal import Terminal


def make_editor(text="", keys="", rows=24, columns=80):
    out = io.StringIO()
    term = Terminal(stdin=io.StringIO(keys), stdout=out, rows=rows, columns=columns)
    editor = Editor(term, "f.txt", sleep=lambda seconds: None)
    editor.buffer.text = text
    editor.update_screen()
    return editor, out


def run_keys(text, keys):
    editor, out = make_editor(text, keys)
    editor.run()
    return editor, out


def test_x_deletes_character_and_records_undo():
    editor, _ = run_keys("abc\n", "x")
    assert editor.buffer.text == "bc\n"
    assert editor.undo_buff == "ia" + ESC
    assert editor.redo_buff == "x"


@pytest.mark.parametrize(
    "text, keys",
    [
        ("abc\n", "xu"),
        ("one\ntwo\nthree\n", "ddu"),
        ("ab\ncd\n", "Ju"),
        ("foo bar\n", "dwu"),
        ("abc\n", "rzu"),
        ("x\n", "ihi" + ESC + "u"),
    ],
)
def test_undo_restores_text(text, keys):
    editor, _ = run_keys(text, keys)
    assert editor.buffer.text == text


def test_shift_right_then_left_round_trip():
    editor, _ = run_keys("ab\ncd\n", "2>>")
    assert editor.buffer.text == "\tab\n\tcd\n"
    editor2, _ = run_keys(editor.buffer.text, "2<<")
    assert editor2.buffer.text == "ab\ncd\n"


def test_delete_then_put_above_round_trip():
    editor, _ = run_keys("one\ntwo\n", "ddP")
    assert editor.buffer.text == "one\ntwo\n"


def test_yank_and_put_below_duplicates_line():
    editor, _ = run_keys("one\ntwo\n", "yyp")
    lines = editor.buffer.text.split("\n")
    assert lines.count("one") == 2
    assert lines.count("two") == 1


def test_insert_then_escape_leaves_normal_mode():
    editor, _ = run_keys("", "ihello" + ESC)
    assert editor.buffer.text == "hello\n"
    assert editor.mode is Mode.NORMAL
    assert editor.redo_buff == "ihello" + ESC


def test_insert_without_escape_stays_in_insert_mode():
    editor, _ = run_keys("ab\n", "iq")
    assert editor.mode is Mode.INSERT
    assert editor.buffer.text == "qab\n"


def test_control_x_inserts_hex_character():
    editor, _ = run_keys("", "i\x1841" + ESC)
    assert editor.buffer.text == "A\n"


def test_join_lines():
    editor, _ = run_keys("ab\ncd\n", "J")
    assert editor.buffer.text == "abcd\n"


def test_replace_character():
    editor, _ = run_keys("abc\n", "rz")
    assert editor.buffer.text == "zbc\n"
    assert editor.buffer.changed


def test_buffer_full_returns_to_normal_mode():
    editor, out = make_editor("", "iabcdefg")
    editor.buffer.capacity = 5
    editor.run()
    assert editor.buffer.text == "abcd"
    assert editor.mode is Mode.NORMAL
    assert "Can't add anything, file is too big!" in out.getvalue()


def test_forward_search_moves_cursor():
    editor, _ = run_keys("ab\ncd\n", "/cd\n")
    assert editor.buffer.cursor == editor.buffer.text.index("cd")


def test_search_not_found_message():
    editor, out = run_keys("ab\n", "/zz\n")
    assert "Pattern not found" in out.getvalue()
    assert editor.buffer.cursor == 0


def test_repeat_search_without_previous_beeps():
    editor, out = make_editor("ab\n")
    assert editor.repeat_search() is False
    assert "\007" in out.getvalue()


def test_quit_refused_when_changed():
    editor, out = run_keys("abc\n", "x:q\n")
    assert editor.done is False
    assert "File not written out.  Use 'q!' to override." in out.getvalue()


def test_quit_forced():
    editor, _ = run_keys("abc\n", "x:q!\n")
    assert editor.done is True


def test_write_and_read_round_trip(tmp_path):
    path = tmp_path / "out.txt"
    editor, _ = make_editor("hello\nworld\n")
    assert editor.write_file(str(path)) is True
    assert path.read_text() == "hello\nworld\n"
    other, _ = make_editor()
    assert other.read_file(str(path), 0, False) is False
    assert other.buffer.text == "hello\nworld\n"
    assert other.filename == str(path)


def test_read_missing_file_reports_new(tmp_path):
    editor, _ = make_editor("old\n")
    assert editor.read_file(str(tmp_path / "missing"), 0, False) is True
    assert editor.buffer.text == ""


def test_write_via_command(tmp_path):
    path = tmp_path / "w.txt"
    editor, _ = make_editor("abc\n", "x:w " + str(path) + "\n")
    editor.run()
    assert path.read_text() == editor.buffer.text


def test_file_info_message():
    editor, out = make_editor("a\nb\n")
    editor.file_info()
    assert '"f.txt" line 1 of 2' in out.getvalue()


def test_goto_line():
    editor, _ = make_editor("ab\ncd\nef\n")
    editor.goto_line(2)
    assert editor.buffer.cursor == editor.buffer.text.index("cd")
    editor.goto_line(0)
    assert editor.buffer.cursor == editor.buffer.text.index("ef")


def test_cursor_update_wraps_long_lines():
    editor, _ = make_editor("a" * 100 + "\n")
    editor.buffer.cursor = 90
    editor.cursor_update()
    assert editor.row * 80 + editor.col == 90
    assert editor.vcol == 90


def test_prenum_count_for_delete_lines():
    editor, _ = run_keys("1\n2\n3\n4\n", "2dd")
    assert editor.buffer.text == "3\n4\n"
    assert editor.prenum == 0


def test_stuffed_input_read_before_terminal():
    editor, _ = make_editor("abc\n", "z")
    editor.stuff_input("xy")
    assert [editor.getc(), editor.getc(), editor.getc()] == ["x", "y", "z"]


def test_dot_repeats_last_change():
    editor, _ = run_keys("abcd\n", "x.")
    assert editor.buffer.text == "cd\n"


def test_message_shown_on_status_line():
    editor, out = make_editor()
    editor.message("hi there")
    assert editor.last_message == "hi there"
    assert out.getvalue().endswith("hi there")