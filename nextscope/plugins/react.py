"""React-specific tree queries shared by the component, hook and pattern plugins."""

from dataclasses import dataclass

from tree_sitter import Node

from nextscope.parsing.nodes import (
    FUNCTION_TYPES,
    callee_tail,
    child_by_field,
    contains_jsx,
    enclosing_function,
    function_name,
    is_hook_name,
    is_pascal_case,
    line_of,
    node_text,
    string_value,
    walk,
)

BUILTIN_HOOKS = frozenset({
    "useState",
    "useEffect",
    "useContext",
    "useReducer",
    "useCallback",
    "useMemo",
    "useRef",
    "useImperativeHandle",
    "useLayoutEffect",
    "useDebugValue",
    "useDeferredValue",
    "useTransition",
    "useId",
    "useSyncExternalStore",
    "useInsertionEffect",
    "useOptimistic",
    "useActionState",
    "useFormStatus",
})

CLASS_COMPONENT_BASES = frozenset({
    "Component",
    "PureComponent",
    "React.Component",
    "React.PureComponent",
})


@dataclass(frozen=True)
class HookCall:
    name: str
    node: Node

    @property
    def line(self) -> int:
        return line_of(self.node)


def hook_calls(node: Node) -> list[HookCall]:
    """Every ``useX(...)`` call under ``node``, including ``React.useX``."""
    calls: list[HookCall] = []
    for current in walk(node):
        if current.type != "call_expression":
            continue
        name = callee_tail(current)
        if is_hook_name(name):
            calls.append(HookCall(name, current))
    return calls


def owned_hook_calls(function: Node) -> list[HookCall]:
    """Hook calls whose nearest enclosing function is ``function`` itself."""
    return [c for c in hook_calls(function) if enclosing_function(c.node) == function]


def distinct_names(calls: list[HookCall]) -> list[str]:
    return list(dict.fromkeys(c.name for c in calls))


def function_params(function: Node) -> list[str]:
    """Parameter names as written (destructured patterns keep their text)."""
    params = child_by_field(function, "parameters")
    if params is None:
        single = child_by_field(function, "parameter")
        return [node_text(single)] if single is not None else []
    names: list[str] = []
    for param in params.children:
        if not param.is_named or param.type == "comment":
            continue
        pattern = child_by_field(param, "pattern")
        names.append(node_text(pattern if pattern is not None else param))
    return names


def function_components(root: Node) -> list[tuple[str, Node]]:
    """PascalCase functions whose body renders JSX, in document order."""
    found: list[tuple[str, Node]] = []
    for node in walk(root):
        if node.type not in FUNCTION_TYPES or node.type == "method_definition":
            continue
        name = function_name(node)
        if not is_pascal_case(name):
            continue
        body = child_by_field(node, "body")
        if body is not None and contains_jsx(body):
            found.append((name, node))
    return found


def class_heritage(node: Node) -> str:
    """Superclass expression text of a class, or an empty string."""
    for child in node.children:
        if child.type == "class_heritage":
            for part in walk(child):
                if part.type in ("identifier", "member_expression") and part.parent is not None:
                    if part.parent.type in ("class_heritage", "extends_clause"):
                        return node_text(part)
    return ""


def class_components(root: Node) -> list[tuple[str, Node]]:
    """Classes extending ``Component`` or ``PureComponent``."""
    found: list[tuple[str, Node]] = []
    for node in walk(root):
        if node.type not in ("class_declaration", "class"):
            continue
        if class_heritage(node) not in CLASS_COMPONENT_BASES:
            continue
        name = node_text(child_by_field(node, "name"))
        if name:
            found.append((name, node))
    return found


def class_has_state(node: Node) -> bool:
    """True when a class assigns or declares ``state``."""
    for current in walk(node):
        if current.type in ("public_field_definition", "field_definition"):
            name = child_by_field(current, "name") or child_by_field(current, "property")
            if node_text(name) == "state":
                return True
        if current.type == "member_expression" and node_text(current) == "this.state":
            parent = current.parent
            if parent is not None and parent.type == "assignment_expression":
                return True
        if current.type == "call_expression" and node_text(child_by_field(current, "function")) == "this.setState":
            return True
    return False


def imports(root: Node) -> list[tuple[str, list[str]]]:
    """Top-level imports as ``(module, imported names)`` pairs."""
    found: list[tuple[str, list[str]]] = []
    for stmt in root.children:
        if stmt.type != "import_statement":
            continue
        source = child_by_field(stmt, "source")
        if source is None:
            continue
        names: list[str] = []
        for node in walk(stmt):
            if node.type == "import_specifier":
                alias = child_by_field(node, "alias")
                names.append(node_text(alias or child_by_field(node, "name")))
            elif node.type == "identifier" and node.parent is not None and node.parent.type == "import_clause":
                names.append(node_text(node))
            elif node.type == "namespace_import":
                names.extend(node_text(c) for c in node.children if c.type == "identifier")
        found.append((string_value(source), names))
    return found
