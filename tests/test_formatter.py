from format_engine.formatting import BasicFormatter
from format_engine.replacements import Range, Replacement
from format_engine.styles import PREDEFINED_STYLES, SortIncludes, StyleConfig

LLVM = PREDEFINED_STYLES["llvm"]
SOURCE = "int x=1;\nint y  =2;\n"
FORMATTED = "int x = 1;\nint y = 2;\n"

MESSY = (
    "#include <vector>\n"
    '#include "widget.h"\n'
    "\n"
    "\n"
    "\n"
    "int main() {\n"
    "\tint total=0;   \n"
    "\tfor (int i=0; i<10; i++) total+=i;\n"
    "\treturn total==45 ? 0 : 1;\n"
    "}\n"
)

MESSY_FORMATTED = (
    '#include "widget.h"\n'
    "#include <vector>\n"
    "\n"
    "int main() {\n"
    "  int total = 0;\n"
    "  for (int i = 0; i<10; i++) total += i;\n"
    "  return total == 45 ? 0 : 1;\n"
    "}\n"
)


def full_range(text: str) -> list[Range]:
    return [Range(0, len(text))]


def format_text(text: str, style: StyleConfig = LLVM, filename: str = "tmp") -> str:
    formatter = BasicFormatter()
    replacements = formatter.reformat(style, text, full_range(text))
    if style.sorts_includes:
        replacements.merge(
            formatter.sort_declarations(style, text, full_range(text), filename)
        )
    return replacements.compose(text)


def test_reformat_emits_minimal_whitespace_edits() -> None:
    replacements = BasicFormatter().reformat(LLVM, SOURCE, full_range(SOURCE))

    assert list(replacements) == [
        Replacement(5, 0, " "),
        Replacement(6, 0, " "),
        Replacement(14, 2, " "),
        Replacement(17, 0, " "),
    ]
    assert replacements.compose(SOURCE) == FORMATTED


def test_ranges_limit_which_lines_are_touched() -> None:
    replacements = BasicFormatter().reformat(LLVM, SOURCE, [Range(9, 11)])

    assert [r.offset for r in replacements] == [14, 17]


def test_space_before_assignment_can_be_disabled() -> None:
    style = LLVM.derive(space_before_assignment_operators=False)

    assert format_text("a  =b;\n", style) == "a= b;\n"


def test_operator_variants_are_spaced() -> None:
    assert format_text("if (a<=b) c+=1;\n") == "if (a <= b) c += 1;\n"
    assert format_text("ok = x!=y;\n") == "ok = x != y;\n"
    assert format_text("flags<<=2;\n") == "flags <<= 2;\n"


def test_lambda_captures_and_operator_overloads_are_left_alone() -> None:
    unchanged = "auto f = [=]() {};\nT& operator=(const T&);\n"

    assert format_text(unchanged) == unchanged


def test_trailing_whitespace_and_blank_lines() -> None:
    assert format_text("int a;   \n\t\nint b;\n") == "int a;\n\nint b;\n"
    assert format_text("a;\n\n\n\nb;\n") == "a;\n\nb;\n"
    assert format_text("a;\n\n\n\nb;\n", LLVM.derive(max_empty_lines_to_keep=2)) == (
        "a;\n\n\nb;\n"
    )


def test_leading_tabs_follow_use_tab() -> None:
    assert format_text("\tint a;\n") == "  int a;\n"
    assert format_text("\tint a;\n", LLVM.derive(indent_width=4)) == "    int a;\n"
    assert format_text("\tint a;\n", LLVM.derive(use_tab=True)) == "\tint a;\n"


def test_literals_and_comments_are_not_reformatted() -> None:
    text = 'x = "a=b"; // c=d\nchar c = \'=\';\n'

    assert BasicFormatter().reformat(LLVM, text, full_range(text)).is_empty()
    assert format_text("/* a=b\n c=d */ x=1;\n") == "/* a=b\n c=d */ x = 1;\n"


def test_preprocessor_directives_are_skipped() -> None:
    text = "#define X  =1   \n"

    assert BasicFormatter().reformat(LLVM, text, full_range(text)).is_empty()


def test_disabled_style_produces_no_edits() -> None:
    none = PREDEFINED_STYLES["none"]
    formatter = BasicFormatter()

    assert formatter.reformat(none, MESSY, full_range(MESSY)).is_empty()
    assert formatter.sort_declarations(none, MESSY, full_range(MESSY), "a.cpp").is_empty()


def test_include_blocks_are_sorted_and_deduplicated() -> None:
    text = (
        "#include <vector>\n"
        '#include "b.h"\n'
        '#include "a.h"\n'
        "#include <vector>\n"
        "\n"
        "int x;\n"
    )

    assert format_text(text) == (
        '#include "a.h"\n'
        '#include "b.h"\n'
        "#include <vector>\n"
        "\n"
        "int x;\n"
    )


def test_main_header_is_sorted_first() -> None:
    text = '#include "alpha.h"\n#include "widget.h"\n'

    assert format_text(text, filename="widget.cpp") == (
        '#include "widget.h"\n#include "alpha.h"\n'
    )


def test_include_case_sensitivity() -> None:
    text = '#include "Beta.h"\n#include "alpha.h"\n'
    insensitive = LLVM.derive(sort_includes=SortIncludes.CASE_INSENSITIVE)

    assert format_text(text) == text
    assert format_text(text, insensitive) == '#include "alpha.h"\n#include "Beta.h"\n'


def test_include_sorting_can_be_turned_off() -> None:
    never = LLVM.derive(sort_includes=SortIncludes.NEVER)
    text = "#include <b>\n#include <a>\n"

    assert BasicFormatter().sort_declarations(never, text, full_range(text), "x").is_empty()


def test_formatting_is_idempotent() -> None:
    once = format_text(MESSY)
    formatter = BasicFormatter()

    assert once == MESSY_FORMATTED
    assert formatter.reformat(LLVM, once, full_range(once)).is_empty()
    assert formatter.sort_declarations(LLVM, once, full_range(once), "tmp").is_empty()


def test_include_opening_a_comment_keeps_its_place() -> None:
    text = '#include "z.h"\n#include "a.h" /* note\n   more */\nint x;\n'
    formatter = BasicFormatter()

    assert formatter.sort_declarations(LLVM, text, full_range(text), "tmp").is_empty()
    assert format_text(text) == text


def test_include_block_resumes_after_an_open_comment() -> None:
    text = (
        '#include "z.h"\n'
        '#include "y.h" /* keep\n'
        "   here */\n"
        '#include "b.h"\n'
        '#include "a.h"\n'
    )

    assert format_text(text) == (
        '#include "z.h"\n'
        '#include "y.h" /* keep\n'
        "   here */\n"
        '#include "a.h"\n'
        '#include "b.h"\n'
    )


def test_operator_runs_are_split_before_spacing() -> None:
    once = format_text("x!==>>=y;\n")

    assert once == "x != = >>= y;\n"
    assert format_text(once) == once
    assert format_text("x=-1;\n") == "x = -1;\n"
    assert format_text("auto c = a<=>b;\n") == "auto c = a<=>b;\n"


def test_unspaced_assignment_never_joins_operators() -> None:
    style = LLVM.derive(space_before_assignment_operators=False)

    once = format_text("a< =b;\n", style)

    assert once == "a< = b;\n"
    assert format_text(once, style) == once
