import pytest

from format_engine.replacements import (
    CompositionError,
    Range,
    Replacement,
    ReplacementConflictError,
    ReplacementSet,
)

SOURCE = "int x=1;\nint y  =2;\n"
FORMATTED = "int x = 1;\nint y = 2;\n"


def make_formatting_set() -> ReplacementSet:
    return ReplacementSet(
        [
            Replacement(17, 0, " "),
            Replacement(5, 0, " "),
            Replacement(14, 2, " "),
            Replacement(6, 0, " "),
        ]
    )


def test_compose_applies_replacements_in_offset_order() -> None:
    replacements = make_formatting_set()

    assert [r.offset for r in replacements] == [5, 6, 14, 17]
    assert replacements.compose(SOURCE) == FORMATTED
    assert replacements.total_delta == len(FORMATTED) - len(SOURCE)


def test_overlapping_replacements_conflict() -> None:
    replacements = ReplacementSet([Replacement(2, 4, "x")])

    with pytest.raises(ReplacementConflictError) as excinfo:
        replacements.add(Replacement(3, 1, "y"))

    assert excinfo.value.existing == Replacement(2, 4, "x")
    assert len(replacements) == 1


def test_insertions_at_same_offset_conflict() -> None:
    replacements = ReplacementSet([Replacement(4, 0, "a")])

    with pytest.raises(ReplacementConflictError):
        replacements.add(Replacement(4, 0, "b"))


def test_insertions_on_removal_edges_are_allowed() -> None:
    replacements = ReplacementSet([Replacement(2, 3, "abc")])
    replacements.add(Replacement(2, 0, "<"))
    replacements.add(Replacement(5, 0, ">"))

    assert len(replacements) == 3
    assert replacements.compose("0123456789") == "01<abc>56789"
    with pytest.raises(ReplacementConflictError):
        replacements.add(Replacement(3, 0, "!"))


def test_merge_combines_independent_batches() -> None:
    reformat = ReplacementSet([Replacement(14, 2, " ")])
    ordering = ReplacementSet([Replacement(0, 3, "long")])

    reformat.merge(ordering)

    assert [r.offset for r in reformat] == [0, 14]


def test_merge_is_all_or_nothing() -> None:
    replacements = ReplacementSet([Replacement(0, 1, "a")])

    with pytest.raises(ReplacementConflictError):
        replacements.merge([Replacement(5, 1, "b"), Replacement(0, 2, "z")])

    assert list(replacements) == [Replacement(0, 1, "a")]


def test_compose_rejects_out_of_bounds_replacement() -> None:
    replacements = ReplacementSet([Replacement(3, 10, "")])

    with pytest.raises(CompositionError):
        replacements.compose("abc")


def test_empty_set() -> None:
    replacements = ReplacementSet()

    assert replacements.is_empty()
    assert not replacements
    assert replacements.compose(SOURCE) == SOURCE
    assert replacements.translate(7) == 7


def test_translate_shifts_by_preceding_deltas() -> None:
    replacements = make_formatting_set()

    assert replacements.translate(0) == 0
    assert replacements.translate(5) == 6  # insertion at the offset comes first
    assert replacements.translate(13) == 15
    assert replacements.translate(16) == 17
    assert replacements.translate(len(SOURCE)) == len(FORMATTED)


def test_translate_snaps_inside_removed_range() -> None:
    replacements = ReplacementSet([Replacement(10, 4, "ab")])

    assert replacements.translate(10) == 10
    assert replacements.translate(11) == 11
    assert replacements.translate(12) == 12
    assert replacements.translate(13) == 12
    assert replacements.translate(14) == 12
    assert replacements.translate(20) == 18


def test_translate_is_monotonic() -> None:
    text = "abcdefghijklmnopqrstuvwxyz"
    replacements = ReplacementSet(
        [
            Replacement(0, 0, "++"),
            Replacement(3, 5, ""),
            Replacement(8, 0, "inserted"),
            Replacement(10, 2, "longer text"),
            Replacement(20, 6, "z"),
        ]
    )
    translated = [replacements.translate(offset) for offset in range(len(text) + 1)]

    assert translated == sorted(translated)
    assert translated[-1] == len(replacements.compose(text))


def test_values_reject_negative_spans() -> None:
    with pytest.raises(ValueError):
        Replacement(-1, 0, "")
    with pytest.raises(ValueError):
        Replacement(0, -2, "")
    with pytest.raises(ValueError):
        Range(0, -1)


def test_range_intersection() -> None:
    assert Range(0, 20).intersects(9, 20)
    assert not Range(9, 11).intersects(0, 9)
    assert Range(5, 0).intersects(0, 9)
    assert not Range(9, 0).intersects(0, 9)
