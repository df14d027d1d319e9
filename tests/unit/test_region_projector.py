from __future__ import annotations

from models.diff import DiffBlock, EditOp
from models.region import Range, Region
from services.diff_engine import DiffEngine
from services.region_projector import project_region, project_span
from services.text_document import TextDocument


def equal(text: str) -> DiffBlock:
    return DiffBlock(op=EditOp.EQUAL, text=text)


def insert(text: str) -> DiffBlock:
    return DiffBlock(op=EditOp.INSERT, text=text)


def delete(text: str) -> DiffBlock:
    return DiffBlock(op=EditOp.DELETE, text=text)


def test_equal_runs_map_one_to_one() -> None:
    script = [equal("hello world")]

    assert project_span(script, 0, 5) == (0, 5)
    assert project_span(script, 6, 11) == (6, 11)


def test_insert_before_region_shifts_it() -> None:
    script = [equal("foo("), insert("baz, "), equal("bar)")]

    assert project_span(script, 4, 7) == (9, 12)


def test_insert_after_region_leaves_it_unchanged() -> None:
    script = [equal("alpha "), insert("new "), equal("beta")]

    assert project_span(script, 0, 5) == (0, 5)


def test_region_inside_one_delete_run_is_absent() -> None:
    script = [equal("keep "), delete("gone "), equal("keep")]

    assert project_span(script, 5, 9) is None
    assert project_span(script, 5, 10) is None


def test_trailing_deletion_is_clipped() -> None:
    script = [equal("hello wo"), delete("rld")]

    assert project_span(script, 6, 11) == (6, 8)


def test_leading_deletion_is_clipped() -> None:
    script = [equal("x = "), delete("old_"), equal("name\n")]

    assert project_span(script, 4, 12) == (4, 8)


def test_surviving_pieces_are_joined_across_edits() -> None:
    script = [equal("ab"), delete("cd"), insert("XYZ"), equal("ef")]

    # "abcdef" -> "abXYZef"; the widest surviving span covers the replacement
    assert project_span(script, 0, 6) == (0, 7)


def test_empty_span_maps_through_enclosing_equal_run() -> None:
    script = [insert(">> "), equal("text")]

    assert project_span(script, 2, 2) == (5, 5)


def test_empty_span_inside_deleted_text_snaps_to_deletion_point() -> None:
    script = [equal("abc"), delete("def"), insert("XY"), equal("ghi")]

    assert project_span(script, 4, 4) == (3, 3)


def test_empty_span_at_end_of_text() -> None:
    script = [equal("abc"), insert("def")]

    assert project_span(script, 3, 3) == (3, 3)


def test_identity_when_texts_match() -> None:
    text = "def f(x):\n\treturn x + 1\n"
    script = DiffEngine().diff_chars(text, text)

    for start, end in [(0, 3), (4, 5), (10, 23), (7, 7)]:
        assert project_span(script, start, end) == (start, end)


def test_project_region_with_real_diff() -> None:
    baseline_doc = TextDocument("file:///a.py", "foo(bar)")
    current_doc = TextDocument("file:///a.py", "foo(baz, bar)")
    script = DiffEngine().diff_chars(baseline_doc.text, current_doc.text)

    projected = project_region(
        script, current_doc, Region(start_line=1, start_column=5, end_column=8), baseline_doc
    )

    assert projected == Range.of(0, 9, 0, 12)
    assert current_doc.get_text(projected) == "bar"


def test_project_region_follows_lines_moved_down() -> None:
    baseline_doc = TextDocument("file:///a.py", "import os\n\ndef main():\n    os.exit(1)\n")
    current_doc = TextDocument(
        "file:///a.py", "import os\nimport sys\n\ndef main():\n    print(sys.argv)\n    os.exit(1)\n"
    )
    script = DiffEngine().diff_chars(baseline_doc.text, current_doc.text)

    projected = project_region(script, current_doc, Region(start_line=4, start_column=5, end_column=15), baseline_doc)

    assert projected is not None
    assert projected.start.line == 5
    assert current_doc.get_text(projected) == "os.exit(1)"


def test_project_region_deleted_lines_are_absent() -> None:
    baseline_doc = TextDocument("file:///a.py", "first()\nsecond()\nthird()\n")
    current_doc = TextDocument("file:///a.py", "first()\nthird()\n")
    script = DiffEngine().diff_chars(baseline_doc.text, current_doc.text)

    assert project_region(script, current_doc, Region(start_line=2, end_column=9), baseline_doc) is None


def test_project_region_without_baseline_is_identity() -> None:
    current_doc = TextDocument("file:///a.py", "one\ntwo\nthree\n")

    projected = project_region([], current_doc, Region(start_line=2, start_column=1, end_column=4))

    assert projected == Range.of(1, 0, 1, 3)
