"""Syntax-tree helpers shared by the extractors.

All traversal is pre-order depth-first, which for tree-sitter trees is
source document order.
"""

import html
import re
from collections.abc import Iterator

from tree_sitter import Node

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "method_definition",
    "generator_function_declaration",
})

JSX_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})

_PASCAL_CASE = re.compile(r"^[A-Z][A-Za-z0-9]*$")
_HOOK_NAME = re.compile(r"^use[A-Z0-9]")


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def child_by_field(node: Node, field_name: str) -> Node | None:
    """Get child by field name."""
    return node.child_by_field_name(field_name)


def child_by_type(node: Node, type_name: str) -> Node | None:
    """Get first child of a specific type."""
    for child in node.children:
        if child.type == type_name:
            return child
    return None


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


# Single-character escapes with a meaning other than the character itself
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_QUOTES = frozenset(b"'\"`")


def decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as ``\\n`` or ``\\u00e9``.

    Unknown escapes decode to the escaped character itself, and a
    backslash before a line break (line continuation) decodes to nothing.
    """
    body = sequence[1:]
    if not body or body[0] in "\r\n\u2028\u2029":
        return ""
    head = body[0]
    if len(body) == 1:
        return _SIMPLE_ESCAPES.get(head, head)
    try:
        if head == "x":
            return chr(int(body[1:], 16))
        if head == "u":
            digits = body[2:-1] if body[1] == "{" else body[1:]
            return chr(int(digits, 16))
        if head.isdigit():
            return chr(int(body, 8))
    except (ValueError, OverflowError):
        return sequence
    return body


def _join_surrogates(text: str) -> str:
    # Characters outside the BMP arrive as two escapes; merge valid pairs
    if not any("\ud800" <= ch <= "\udfff" for ch in text):
        return text
    try:
        return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError:
        return text


def string_value(node: Node) -> str:
    """The value a ``string`` or ``template_string`` literal evaluates to.

    Escape sequences are decoded, as are HTML character references in JSX
    attribute strings. Template substitutions are replaced by ``${...}`` so
    the static text survives intact.
    """
    raw = node.text or b""
    start, end = 0, len(raw)
    if len(raw) >= 2 and raw[0] in _QUOTES and raw[-1] == raw[0]:
        start, end = 1, len(raw) - 1

    parts: list[str] = []
    cursor = start
    for child in node.children:
        offset = child.start_byte - node.start_byte
        if child.type == "escape_sequence":
            replacement = decode_escape(node_text(child))
        elif child.type == "html_character_reference":
            replacement = html.unescape(node_text(child))
        elif child.type == "template_substitution":
            replacement = "${...}"
        else:
            continue
        parts.append(raw[cursor:offset].decode("utf-8", errors="replace"))
        parts.append(replacement)
        cursor = child.end_byte - node.start_byte
    parts.append(raw[cursor:end].decode("utf-8", errors="replace"))
    return _join_surrogates("".join(parts))


def line_of(node: Node) -> int:
    """1-based line number (tree-sitter rows are 0-indexed)."""
    return node.start_point[0] + 1


def is_pascal_case(name: str | None) -> bool:
    return bool(name) and bool(_PASCAL_CASE.match(name))


def is_hook_name(name: str | None) -> bool:
    """True for ``useX`` style names (``use`` alone is not a hook)."""
    return bool(name) and bool(_HOOK_NAME.match(name))


def function_name(node: Node) -> str | None:
    """Name of a function-like node.

    Declarations carry a ``name`` field; arrow functions and function
    expressions take the name of the variable, pair, or assignment they
    are bound to.
    """
    name_node = child_by_field(node, "name")
    if name_node is not None:
        return node_text(name_node)

    parent = node.parent
    # Unwrap wrappers like memo(() => ...) and forwardRef(function () {...})
    while parent is not None and parent.type in ("arguments", "call_expression", "parenthesized_expression"):
        parent = parent.parent
    if parent is None:
        return None
    if parent.type == "variable_declarator":
        return node_text(child_by_field(parent, "name")) or None
    if parent.type == "pair":
        return node_text(child_by_field(parent, "key")) or None
    if parent.type == "assignment_expression":
        left = child_by_field(parent, "left")
        if left is not None and left.type == "member_expression":
            return node_text(child_by_field(left, "property")) or None
        return node_text(left) or None
    return None


def call_name(call: Node) -> str:
    """Full callee text of a ``call_expression`` (e.g. ``console.log``)."""
    func = child_by_field(call, "function")
    if func is None:
        return ""
    if func.type in ("identifier", "member_expression"):
        return node_text(func)
    return ""


def callee_tail(call: Node) -> str:
    """Last identifier of the callee (``React.useState`` -> ``useState``)."""
    func = child_by_field(call, "function")
    if func is None:
        return ""
    if func.type == "identifier":
        return node_text(func)
    if func.type == "member_expression":
        return node_text(child_by_field(func, "property"))
    return ""


def enclosing_function(node: Node) -> Node | None:
    """Nearest function-like ancestor of ``node``."""
    current = node.parent
    while current is not None:
        if current.type in FUNCTION_TYPES:
            return current
        current = current.parent
    return None


def enclosing_component(node: Node) -> str | None:
    """Name of the nearest PascalCase function or class enclosing ``node``."""
    current = node.parent
    while current is not None:
        if current.type in FUNCTION_TYPES:
            name = function_name(current)
            if is_pascal_case(name):
                return name
        elif current.type in ("class_declaration", "class"):
            name = node_text(child_by_field(current, "name"))
            if is_pascal_case(name):
                return name
        current = current.parent
    return None


def jsx_tag_name(element: Node) -> str | None:
    """Tag name of a JSX element (``div``, ``Button``, ``Foo.Bar``)."""
    if element.type == "jsx_element":
        opening = child_by_field(element, "open_tag") or child_by_type(element, "jsx_opening_element")
        if opening is None:
            return None
        element = opening
    name = child_by_field(element, "name")
    return node_text(name) or None


def contains_jsx(node: Node) -> bool:
    return any(n.type in JSX_TYPES for n in walk(node))


def is_exported(node: Node) -> bool:
    """Check if a definition sits under an export statement."""
    parent = node.parent
    while parent is not None:
        if parent.type == "export_statement":
            return True
        if parent.type in ("program", "statement_block", "class_body"):
            break
        parent = parent.parent
    return False


def is_default_export(node: Node) -> bool:
    parent = node.parent
    while parent is not None and parent.type != "export_statement":
        if parent.type in ("program", "statement_block"):
            return False
        parent = parent.parent
    if parent is None:
        return False
    return any(child.type == "default" for child in parent.children)


def exported_names(root: Node) -> tuple[set[str], str | None]:
    """Collect names exported from a module.

    Handles ``export { a, b as c }`` clauses and ``export default Name;``
    in addition to exported declarations.

    Returns:
        Tuple of (exported names, default-exported name or None).
    """
    names: set[str] = set()
    default_name: str | None = None
    for stmt in root.children:
        if stmt.type != "export_statement":
            continue
        is_default = any(child.type == "default" for child in stmt.children)
        declaration = child_by_field(stmt, "declaration")
        value = child_by_field(stmt, "value")
        if declaration is not None:
            if declaration.type in ("lexical_declaration", "variable_declaration"):
                for declarator in declaration.children:
                    if declarator.type == "variable_declarator":
                        names.add(node_text(child_by_field(declarator, "name")))
            else:
                name = node_text(child_by_field(declaration, "name"))
                if name:
                    names.add(name)
                    if is_default:
                        default_name = name
        elif value is not None and value.type == "identifier":
            default_name = node_text(value)
            names.add(default_name)
        for clause in stmt.children:
            if clause.type != "export_clause":
                continue
            for spec in clause.children:
                if spec.type == "export_specifier":
                    names.add(node_text(child_by_field(spec, "name")))
    names.discard("")
    return names, default_name
