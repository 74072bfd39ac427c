"""Language profiles - single source of truth for per-language summarization config.

Every supported language id resolves to exactly ONE LanguageProfile that
consolidates:
- Grammar metadata (package, module, loader function)
- The summarization query (S-expression patterns, capture name == symbol kind)
- Comment syntax used by the doc-comment locator
- Member predicates used when filtering class / impl bodies
- Body style (brace vs. indentation) driving placeholders and closing lines

The PROFILES registry is the canonical lookup: ``PROFILES["python"]``.
TypeScript, JavaScript, TSX and JSX share one profile parsed with the TSX
grammar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import PurePath

from codeshrink.core.errors import SummarizationError

# =========================================================================
# Dataclasses
# =========================================================================


class BodyStyle(StrEnum):
    BRACE = "brace"
    INDENT = "indent"


@dataclass(frozen=True)
class CommentRules:
    """How a trimmed source line is recognized as part of a doc comment."""

    line_prefixes: tuple[str, ...] = ()
    # (opener, closer) pairs; a line ending in a closer opens a block when
    # scanning upward, and the line starting with the opener completes it.
    block_pairs: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class MemberRules:
    """Which lines of a class / impl body are kept as member declarations."""

    prefixes: tuple[str, ...] = ()
    # A line containing "(" and any of these markers is a method signature
    # even without a modifier keyword (``bar() {``, ``bar(): T``).
    signature_markers: tuple[str, ...] = ()
    # Members sit at the indentation of the first real body line.
    default_indent: int = 4
    comment_prefixes: tuple[str, ...] = ("//", "/*", "*")
    # Indentation-based languages only: instance fields assigned in methods.
    self_prefix: str | None = None
    # Keep the doc comment directly above each kept member.
    doc_comments: bool = False


@dataclass(frozen=True)
class LanguageProfile:
    """Complete summarization configuration for one language."""

    # -- Identity --
    name: str
    grammar_name: str

    # -- Grammar --
    grammar_package: str  # PyPI package ("tree-sitter-python")
    grammar_module: str  # Python import ("tree_sitter_python")
    # Non-standard function name (e.g. "language_tsx")
    language_func: str | None = None

    # -- Query --
    query_text: str = ""

    # -- Rendering --
    body_style: BodyStyle = BodyStyle.BRACE
    line_comment: str = "//"
    closing_line: str | None = "}"
    # Secondary body marker for arrow-style bindings ("=>")
    arrow_marker: str | None = None

    # -- Doc comments --
    comment_rules: CommentRules = field(default_factory=CommentRules)

    # -- Member filtering (None -> bounded truncation) --
    class_members: MemberRules | None = None
    impl_members: MemberRules | None = None


# =========================================================================
# Shared comment syntax
# =========================================================================

_C_STYLE_COMMENTS = CommentRules(
    line_prefixes=("//", "*"),
    block_pairs=(("/*", "*/"),),
)


# =========================================================================
# TYPESCRIPT / JAVASCRIPT / TSX / JSX
# =========================================================================

# A const binding whose value is an arrow function renders as arrow_function.
_ARROW_BINDING_RE = (
    r"^[^=]*=[ \t\r\n]*(async[ \t\r\n]+)?"
    r"([(][^)]*[)]|[A-Za-z_$][A-Za-z0-9_$]*)[ \t\r\n]*(:[^=]*)?=>"
)

_TYPESCRIPT_QUERY = (
    """
    (program (function_declaration) @function)
    (program (generator_function_declaration) @function)
    (program (export_statement (function_declaration)) @function)
    (program (export_statement (generator_function_declaration)) @function)
    (program (lexical_declaration
      (variable_declarator
        name: (identifier)
        value: (arrow_function))) @arrow_function)
    (program (export_statement
      (lexical_declaration
        (variable_declarator
          name: (identifier)
          value: (arrow_function)))) @arrow_function)
    (program (class_declaration) @class)
    (program (export_statement (class_declaration)) @class)
    (program (abstract_class_declaration) @class)
    (program (export_statement (abstract_class_declaration)) @class)
    (program (interface_declaration) @interface)
    (program (export_statement (interface_declaration)) @interface)
    (program (type_alias_declaration) @type_alias)
    (program (export_statement (type_alias_declaration)) @type_alias)
    (program (enum_declaration) @enum)
    (program (export_statement (enum_declaration)) @enum)
    """
    f"""
    (program (lexical_declaration) @const_decl
      (#not-match? @const_decl "{_ARROW_BINDING_RE}"))
    (program (export_statement (lexical_declaration)) @const_decl
      (#not-match? @const_decl "{_ARROW_BINDING_RE}"))
    """
)

TYPESCRIPT_PROFILE = LanguageProfile(
    name="typescript",
    grammar_name="tsx",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    language_func="language_tsx",
    query_text=_TYPESCRIPT_QUERY,
    arrow_marker="=>",
    comment_rules=_C_STYLE_COMMENTS,
    class_members=MemberRules(
        prefixes=(
            "private ",
            "public ",
            "protected ",
            "readonly ",
            "static ",
            "abstract ",
            "override ",
            "declare ",
            "constructor",
            "async ",
            "@",
            "get ",
            "set ",
        ),
        signature_markers=(") {", "): ", ") => {"),
        default_indent=2,
    ),
)


# =========================================================================
# PYTHON
# =========================================================================

PYTHON_PROFILE = LanguageProfile(
    name="python",
    grammar_name="python",
    grammar_package="tree-sitter-python",
    grammar_module="tree_sitter_python",
    query_text="""
    (module (function_definition) @function)
    (module (decorated_definition
      definition: (function_definition)) @function)
    (module (class_definition) @class)
    (module (decorated_definition
      definition: (class_definition)) @class)
    (module (expression_statement (assignment)) @assignment)
    """,
    body_style=BodyStyle.INDENT,
    line_comment="#",
    closing_line=None,
    comment_rules=CommentRules(
        line_prefixes=("#",),
        block_pairs=(('"""', '"""'), ("'''", "'''")),
    ),
    class_members=MemberRules(
        prefixes=("def ", "async def "),
        default_indent=4,
        comment_prefixes=("#",),
        self_prefix="self.",
    ),
)


# =========================================================================
# RUST
# =========================================================================

RUST_PROFILE = LanguageProfile(
    name="rust",
    grammar_name="rust",
    grammar_package="tree-sitter-rust",
    grammar_module="tree_sitter_rust",
    query_text="""
    (source_file (function_item) @function)
    (source_file (struct_item) @struct)
    (source_file (enum_item) @enum)
    (source_file (trait_item) @trait)
    (source_file (impl_item) @impl)
    (source_file (type_item) @type_alias)
    (source_file (const_item) @const)
    (source_file (static_item) @static)
    """,
    comment_rules=CommentRules(line_prefixes=("///", "//!")),
    impl_members=MemberRules(
        prefixes=(
            "fn ",
            "pub fn ",
            # pub(crate), pub(super) and pub(in path) visibilities
            "pub(",
            "async fn ",
            "pub async fn ",
            "const ",
            "pub const ",
            "unsafe fn ",
            "pub unsafe fn ",
            "type ",
            "pub type ",
            "#[",
        ),
    ),
)


# =========================================================================
# GO
# =========================================================================

GO_PROFILE = LanguageProfile(
    name="go",
    grammar_name="go",
    grammar_package="tree-sitter-go",
    grammar_module="tree_sitter_go",
    query_text="""
    (source_file (function_declaration) @function)
    (source_file (method_declaration) @method)
    (source_file (type_declaration) @type_decl)
    (source_file (const_declaration) @const)
    (source_file (var_declaration) @var)
    """,
    comment_rules=CommentRules(line_prefixes=("//",)),
)


# =========================================================================
# JAVA
# =========================================================================

JAVA_PROFILE = LanguageProfile(
    name="java",
    grammar_name="java",
    grammar_package="tree-sitter-java",
    grammar_module="tree_sitter_java",
    query_text="""
    (program (class_declaration) @class)
    (program (interface_declaration) @interface)
    (program (enum_declaration) @enum)
    """,
    comment_rules=_C_STYLE_COMMENTS,
    class_members=MemberRules(
        prefixes=(
            "private ",
            "public ",
            "protected ",
            "static ",
            "final ",
            "abstract ",
            "synchronized ",
            "@",
        ),
        signature_markers=(") {", ") throws "),
        doc_comments=True,
    ),
)


# =========================================================================
# C / C++
# =========================================================================


def _c_family_query(parents: tuple[str, ...], items: tuple[tuple[str, str], ...]) -> str:
    """Expand each (pattern, kind) under every top-level parent pattern."""
    lines = [
        parent.format(f"{pattern} @{kind}") for pattern, kind in items for parent in parents
    ]
    return "\n".join(f"    {line}" for line in lines) + "\n"


# Header guards wrap whole files in #ifndef / #if blocks.
_C_PARENTS = (
    "(translation_unit {})",
    "(preproc_ifdef {})",
    "(preproc_if {})",
)

_C_ITEMS = (
    ("(function_definition)", "function"),
    ("(declaration declarator: (function_declarator))", "function"),
    ("(struct_specifier)", "struct"),
    ("(union_specifier)", "struct"),
    ("(enum_specifier)", "enum"),
    ("(type_definition)", "typedef"),
)

C_PROFILE = LanguageProfile(
    name="c",
    grammar_name="c",
    grammar_package="tree-sitter-c",
    grammar_module="tree_sitter_c",
    query_text=_c_family_query(_C_PARENTS, _C_ITEMS),
    comment_rules=_C_STYLE_COMMENTS,
)

CPP_PROFILE = LanguageProfile(
    name="cpp",
    grammar_name="cpp",
    grammar_package="tree-sitter-cpp",
    grammar_module="tree_sitter_cpp",
    query_text=_c_family_query(
        (
            *_C_PARENTS,
            "(namespace_definition body: (declaration_list {}))",
            "(linkage_specification body: (declaration_list {}))",
        ),
        (
            *_C_ITEMS,
            ("(class_specifier)", "class"),
            ("(template_declaration (function_definition))", "function"),
            ("(template_declaration (class_specifier))", "class"),
        ),
    ),
    comment_rules=_C_STYLE_COMMENTS,
)


# =========================================================================
# Registry
# =========================================================================

# language id -> Profile
PROFILES: dict[str, LanguageProfile] = {
    "python": PYTHON_PROFILE,
    "rust": RUST_PROFILE,
    "go": GO_PROFILE,
    "java": JAVA_PROFILE,
    "c": C_PROFILE,
    "cpp": CPP_PROFILE,
    "typescript": TYPESCRIPT_PROFILE,
    "javascript": TYPESCRIPT_PROFILE,
    "tsx": TYPESCRIPT_PROFILE,
    "jsx": TYPESCRIPT_PROFILE,
    "ts": TYPESCRIPT_PROFILE,
    "js": TYPESCRIPT_PROFILE,
}

# Extension -> language id
_EXT_TO_LANGUAGE: dict[str, str] = {
    "py": "python",
    "pyi": "python",
    "rs": "rust",
    "go": "go",
    "java": "java",
    "c": "c",
    "h": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "hpp": "cpp",
    "hh": "cpp",
    "hxx": "cpp",
    "ts": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "tsx": "tsx",
    "js": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "jsx": "jsx",
}


# =========================================================================
# Public API
# =========================================================================


def get_profile(language_id: str) -> LanguageProfile | None:
    """Get a LanguageProfile by language id (case-insensitive)."""
    return PROFILES.get(language_id.strip().lower())


def resolve_profile(language_id: str) -> LanguageProfile:
    """Like get_profile(), but unknown ids raise UNSUPPORTED_LANGUAGE."""
    profile = get_profile(language_id)
    if profile is None:
        raise SummarizationError.unsupported_language(language_id)
    return profile


def supported_languages() -> tuple[str, ...]:
    return tuple(sorted(PROFILES))


def language_for_path(path: str | PurePath) -> str | None:
    """Detect a language id from a file extension."""
    ext = PurePath(path).suffix.lower().lstrip(".")
    return _EXT_TO_LANGUAGE.get(ext)
