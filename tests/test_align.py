import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "packages" / "core_engine" / "src"))

from td_core.align import adjust_table, column_widths, display_width, replace_line_breaks


def _matrix():
    return [
        ["Name", "Comment"],
        ["----", "----"],
        ["id", "primary key"],
        ["user_name", "コメント"],
        ["body", "line one\nline two"],
    ]


def test_display_width_counts_wide_characters_twice():
    assert display_width("abc") == 3
    assert display_width("コメント") == 8
    assert display_width("aコ") == 3


def test_line_breaks_become_br_marker():
    assert replace_line_breaks("a\r\nb\nc\rd") == "a<br>b<br>c<br>d"


def test_column_widths_use_display_width_after_br_replacement():
    # "line one<br>line two" is 20 columns wide.
    assert column_widths(_matrix()) == [9, 20]


def test_every_cell_padded_to_column_width():
    adjusted = adjust_table(_matrix())
    widths = column_widths(_matrix())
    for row in adjusted:
        for j, cell in enumerate(row):
            assert display_width(cell) == widths[j]


def test_separator_row_is_dashes_of_column_width():
    adjusted = adjust_table(_matrix())
    assert adjusted[1] == ["-" * 9, "-" * 20]


def test_wide_cell_padding_accounts_for_width():
    adjusted = adjust_table(_matrix())
    assert adjusted[3][1] == "コメント" + " " * 12


def test_rows_and_columns_keep_order():
    original = _matrix()
    adjusted = adjust_table(original)
    assert len(adjusted) == len(original)
    assert [row[0].rstrip() for row in adjusted[2:]] == ["id", "user_name", "body"]
    assert adjusted[4][1] == "line one<br>line two"


def test_input_matrix_left_untouched():
    original = _matrix()
    adjust_table(original)
    assert original == _matrix()


def test_empty_matrix():
    assert adjust_table([]) == []
