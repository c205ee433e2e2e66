"""Candidate collection for translatable-string analysis.

Walks a syntax tree in document order and emits every string that sits in
one of the contexts the validators understand, tagged with the name of the
immediately enclosing attribute, variable, call, or object property.
Strings passed to translation functions are collected separately as
translation usages.
"""

from dataclasses import dataclass
from enum import StrEnum

from tree_sitter import Node

from nextscope.i18n.config import I18nConfig
from nextscope.parsing.nodes import (
    call_name,
    callee_tail,
    child_by_field,
    enclosing_component,
    jsx_tag_name,
    line_of,
    node_text,
    string_value,
    walk,
)


class ContextKind(StrEnum):
    MARKUP_TEXT = "markup-text"
    MARKUP_ATTRIBUTE = "markup-attribute"
    VARIABLE_INITIALIZER = "variable-initializer"
    CALL_ARGUMENT = "call-argument"
    OBJECT_PROPERTY_VALUE = "object-property-value"
    FORM_FIELD = "form-field"


# Chained schema methods whose string argument is a validation message,
# e.g. yup.string().required("Email is required")
VALIDATION_METHODS = frozenset({
    "required", "email", "min", "max", "minLength", "maxLength", "length",
    "matches", "pattern", "oneOf", "notOneOf", "url", "uuid", "integer",
    "positive", "negative", "typeError", "test", "refine", "nonempty",
})

_STRING_TYPES = frozenset({"string", "template_string"})
_MARKUP_KINDS = frozenset({ContextKind.MARKUP_TEXT, ContextKind.MARKUP_ATTRIBUTE})

# Ancestors whose strings are never user-facing text
_SKIP_ANCESTORS = frozenset({
    "import_statement",
    "import_clause",
    "type_annotation",
    "literal_type",
    "type_alias_declaration",
    "interface_declaration",
    "enum_declaration",
    "predefined_type",
})


@dataclass(frozen=True)
class Candidate:
    """A string found in a classifiable position."""

    text: str
    context_kind: ContextKind
    line: int = 0
    column: int = 0
    attribute_name: str | None = None
    variable_name: str | None = None
    function_name: str | None = None
    property_name: str | None = None
    element_name: str | None = None
    component: str | None = None
    template: bool = False


@dataclass(frozen=True)
class TranslationUsage:
    """A call to a translation function."""

    function_name: str
    key: str
    line: int
    column: int
    default_value: str | None = None

    @property
    def is_dynamic(self) -> bool:
        return "${" in self.key or "+" in self.key


def _is_translation_call(call: Node, config: I18nConfig) -> bool:
    return call_name(call) in config.translation_functions


def _inside_translation_call(node: Node, config: I18nConfig) -> bool:
    current = node.parent
    while current is not None:
        if current.type == "call_expression" and _is_translation_call(current, config):
            return True
        current = current.parent
    return False


def _skipped(node: Node) -> bool:
    current = node.parent
    while current is not None:
        if current.type in _SKIP_ANCESTORS:
            return True
        # export ... from "module"
        if current.type == "export_statement" and child_by_field(current, "source") is not None:
            return True
        current = current.parent
    return False


def _string_context(node: Node) -> dict[str, object] | None:
    """Classify where a string literal sits.

    Returns the candidate fields for the immediately enclosing construct,
    or None when the position is not classifiable.
    """
    parent = node.parent
    if parent is None:
        return None

    # {"..."} inside JSX: look through the expression container
    container = parent
    if container.type == "jsx_expression":
        container = container.parent
        if container is None:
            return None
        if container.type in ("jsx_element", "jsx_fragment"):
            return {"context_kind": ContextKind.MARKUP_TEXT, "element_name": jsx_tag_name(container)}

    if container.type == "jsx_attribute":
        name_node = container.children[0] if container.children else None
        return {"context_kind": ContextKind.MARKUP_ATTRIBUTE, "attribute_name": node_text(name_node) or None}

    if parent.type == "variable_declarator" and child_by_field(parent, "value") == node:
        return {
            "context_kind": ContextKind.VARIABLE_INITIALIZER,
            "variable_name": node_text(child_by_field(parent, "name")) or None,
        }

    if parent.type == "assignment_expression" and child_by_field(parent, "right") == node:
        left = child_by_field(parent, "left")
        if left is not None and left.type == "member_expression":
            name = node_text(child_by_field(left, "property"))
        else:
            name = node_text(left)
        return {"context_kind": ContextKind.VARIABLE_INITIALIZER, "variable_name": name or None}

    if parent.type == "pair" and child_by_field(parent, "value") == node:
        key = child_by_field(parent, "key")
        key_name = string_value(key) if key is not None and key.type == "string" else node_text(key)
        return {"context_kind": ContextKind.OBJECT_PROPERTY_VALUE, "property_name": key_name or None}

    if parent.type == "arguments" and parent.parent is not None and parent.parent.type == "call_expression":
        call = parent.parent
        function = call_name(call) or None
        tail = callee_tail(call)
        func_node = child_by_field(call, "function")
        if func_node is not None and func_node.type == "member_expression" and tail in VALIDATION_METHODS:
            return {
                "context_kind": ContextKind.FORM_FIELD,
                "function_name": function,
                "property_name": tail,
            }
        return {"context_kind": ContextKind.CALL_ARGUMENT, "function_name": function}

    return None


def collect_candidates(root: Node, config: I18nConfig) -> list[Candidate]:
    """Collect classifiable strings from a syntax tree in document order.

    Args:
        root: Root node of the parsed file.
        config: Extraction settings (length floor, exclusions, toggles).

    Returns:
        Candidates in the order their text appears in the source.
    """
    candidates: list[Candidate] = []

    for node in walk(root):
        if node.type == "jsx_text":
            if not config.analyze_jsx_text:
                continue
            text = node_text(node).strip()
            if not config.is_candidate_text(text):
                continue
            candidates.append(Candidate(
                text=text,
                context_kind=ContextKind.MARKUP_TEXT,
                line=line_of(node),
                column=node.start_point[1],
                element_name=jsx_tag_name(node.parent) if node.parent is not None else None,
                component=enclosing_component(node),
            ))

        elif node.type in _STRING_TYPES:
            context = _string_context(node)
            if context is None:
                continue
            kind = context["context_kind"]
            if kind == ContextKind.MARKUP_TEXT and not config.analyze_jsx_text:
                continue
            if kind not in _MARKUP_KINDS and not config.analyze_string_literals:
                continue
            text = string_value(node).strip()
            if not config.is_candidate_text(text):
                continue
            if _skipped(node) or _inside_translation_call(node, config):
                continue
            candidates.append(Candidate(
                text=text,
                line=line_of(node),
                column=node.start_point[1],
                component=enclosing_component(node),
                template=node.type == "template_string",
                **context,  # type: ignore[arg-type]
            ))

    return candidates


def _first_string_argument(call: Node, index: int) -> Node | None:
    args = child_by_field(call, "arguments")
    if args is None:
        return None
    values = [c for c in args.children if c.is_named and c.type != "comment"]
    if len(values) <= index:
        return None
    return values[index]


def collect_translation_usage(root: Node, config: I18nConfig) -> list[TranslationUsage]:
    """Find calls to configured translation functions.

    The key is the first argument (string or template); the default value
    is a string second argument or its ``defaultValue`` property.
    """
    usages: list[TranslationUsage] = []
    for node in walk(root):
        if node.type != "call_expression" or not _is_translation_call(node, config):
            continue
        key_node = _first_string_argument(node, 0)
        if key_node is None or key_node.type not in _STRING_TYPES:
            continue

        default_value: str | None = None
        second = _first_string_argument(node, 1)
        if second is not None and second.type == "string":
            default_value = string_value(second)
        elif second is not None and second.type == "object":
            for pair in second.children:
                if pair.type != "pair":
                    continue
                key = child_by_field(pair, "key")
                value = child_by_field(pair, "value")
                key_name = string_value(key) if key is not None and key.type == "string" else node_text(key)
                if key_name == "defaultValue" and value is not None and value.type == "string":
                    default_value = string_value(value)
                    break

        usages.append(TranslationUsage(
            function_name=call_name(node),
            key=string_value(key_node),
            line=line_of(node),
            column=node.start_point[1],
            default_value=default_value,
        ))
    return usages


def suggest_key(text: str, separator: str = ".") -> str:
    """Suggested translation key: lower-cased alphanumerics joined by dots."""
    cleaned = "".join(ch for ch in text.lower() if ch.isascii() and (ch.isalnum() or ch.isspace()))
    return separator.join(cleaned.split())[:50]
