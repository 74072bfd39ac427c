"""Tests for the doc-comment locator."""

from codeshrink.summarize._internal.doc_comments import locate_doc_comment
from codeshrink.summarize._internal.packs import (
    JAVA_PROFILE,
    PYTHON_PROFILE,
    RUST_PROFILE,
)

C_RULES = JAVA_PROFILE.comment_rules
PY_RULES = PYTHON_PROFILE.comment_rules


class TestLineComments:
    """Runs of single-line comments."""

    def test_collects_adjacent_lines_oldest_first(self) -> None:
        # Given
        lines = ["let a = 1;", "// first", "// second", "function f() {}"]

        # When
        result = locate_doc_comment(lines, 3, C_RULES)

        # Then
        assert result == "// first\n// second"

    def test_blank_line_breaks_association(self) -> None:
        """A blank line between comment and symbol means no doc comment."""
        # Given
        lines = ["// detached", "", "function f() {}"]

        # When
        result = locate_doc_comment(lines, 2, C_RULES)

        # Then
        assert result == ""

    def test_blank_line_above_block_stops_scan(self) -> None:
        """Only the run touching the symbol is collected."""
        lines = ["// older", "", "// newer", "function f() {}"]
        assert locate_doc_comment(lines, 3, C_RULES) == "// newer"

    def test_symbol_on_first_line_has_no_doc(self) -> None:
        assert locate_doc_comment(["function f() {}"], 0, C_RULES) == ""

    def test_lines_are_trimmed(self) -> None:
        lines = ["    // indented", "    fn x() {}"]
        assert locate_doc_comment(lines, 1, C_RULES) == "// indented"

    def test_python_hash_comments(self) -> None:
        lines = ["import os", "# Adds one.", "def f(x):", "    return x + 1"]
        assert locate_doc_comment(lines, 2, PY_RULES) == "# Adds one."

    def test_rust_plain_comment_is_not_doc(self) -> None:
        """Rust only treats /// and //! as doc comments."""
        rules = RUST_PROFILE.comment_rules
        assert locate_doc_comment(["// note", "fn f() {}"], 1, rules) == ""
        assert locate_doc_comment(["/// Docs", "fn f() {}"], 1, rules) == "/// Docs"


class TestBlockComments:
    """Delimited comments."""

    def test_jsdoc_block_read_to_opener(self) -> None:
        # Given
        lines = ["/**", " * Adds.", " *", " */", "function add() {}"]

        # When
        result = locate_doc_comment(lines, 4, C_RULES)

        # Then
        assert result == "/**\n* Adds.\n*\n*/"

    def test_single_line_block(self) -> None:
        lines = ["int x;", "/** Counter. */", "int count;"]
        assert locate_doc_comment(lines, 2, C_RULES) == "/** Counter. */"

    def test_block_stops_at_opener(self) -> None:
        """Lines above the opener do not join the block."""
        lines = ["// unrelated", "/* doc", "   more */", "void f();"]
        assert locate_doc_comment(lines, 3, C_RULES) == "/* doc\nmore */"

    def test_trailing_comment_after_code_is_not_doc(self) -> None:
        lines = ["int x = 1; /* set */", "void f();"]
        assert locate_doc_comment(lines, 1, C_RULES) == ""

    def test_unterminated_block_at_top_of_file_is_dropped(self) -> None:
        lines = ["still a comment */", "void f();"]
        assert locate_doc_comment(lines, 1, C_RULES) == ""

    def test_python_string_tail_is_not_doc(self) -> None:
        """A closing triple quote that ends a string assignment is not a comment."""
        lines = ['TEXT = """', "body", '"""', "def f():", "    pass"]
        assert locate_doc_comment(lines, 3, PY_RULES) == ""

    def test_python_standalone_triple_quoted_block(self) -> None:
        lines = ["x = 1", '"""', "Module notes.", '"""', "def f():", "    pass"]
        assert locate_doc_comment(lines, 4, PY_RULES) == '"""\nModule notes.\n"""'

    def test_opener_mentioned_in_prose_keeps_block(self) -> None:
        # Given
        lines = [
            "/**",
            " * Handles routes under `/api/*` for the proxy.",
            " Mounted on /static/* as well.",
            " */",
            "export function route() {}",
        ]

        # When
        result = locate_doc_comment(lines, 4, C_RULES)

        # Then
        assert result == (
            "/**\n"
            "* Handles routes under `/api/*` for the proxy.\n"
            "Mounted on /static/* as well.\n"
            "*/"
        )

    def test_block_opened_after_statement_is_dropped(self) -> None:
        lines = ["int x = 1; /* starts", "   here */", "void f();"]
        assert locate_doc_comment(lines, 2, C_RULES) == ""

    def test_code_after_single_line_block_is_not_doc(self) -> None:
        lines = ["/* one */ int a;", "int main(void) {", "}"]
        assert locate_doc_comment(lines, 1, C_RULES) == ""

    def test_code_between_two_blocks_is_not_doc(self) -> None:
        lines = ["/* a */ x; /* b */", "void f();"]
        assert locate_doc_comment(lines, 1, C_RULES) == ""

    def test_python_return_of_triple_quoted_string_is_not_doc(self) -> None:
        lines = ["    return '''", "    text", "    '''", "def g():", "    pass"]
        assert locate_doc_comment(lines, 3, PY_RULES) == ""
