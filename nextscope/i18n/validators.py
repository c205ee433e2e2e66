"""Heuristic validators deciding whether a candidate string is user-facing.

Each validator is data: a name, a description, a priority, an applicability
predicate, and a pure decision function. The registry keeps them in an
explicit, inspectable list ordered by priority and then registration order.

The thresholds below are product policy. Note that the attribute filter
treats single words shorter than 4 characters as technical while the alert
filter uses 5; the two are tuned independently.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from nextscope.i18n.candidates import Candidate, ContextKind

_HAS_LETTER = re.compile(r"[a-zA-Z]")

EMPTY_REASON = "Text is empty or contains no letters"


class Priority(IntEnum):
    """Validator priority; lower value runs first."""

    HIGH = 0
    MEDIUM = 1
    LOW = 2

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Verdict:
    """Outcome of one validator on one candidate."""

    accepted: bool
    reason: str
    applicable: bool = True


@dataclass(frozen=True)
class Validator:
    """A named, prioritized heuristic.

    Attributes:
        name: Stable identifier.
        description: Human-readable summary of the rule.
        priority: Ordering and reason precedence.
        applies: Precondition; when False the validator is not consulted.
        decide: Pure decision over the candidate.
        precondition: Reason reported when ``applies`` is False.
    """

    name: str
    description: str
    priority: Priority
    applies: Callable[[Candidate], bool]
    decide: Callable[[Candidate], Verdict]
    precondition: str = "Not applicable"

    def evaluate(self, candidate: Candidate) -> Verdict:
        if not self.applies(candidate):
            return Verdict(False, self.precondition, applicable=False)
        return self.decide(candidate)


def has_letters(text: str | None) -> bool:
    """Base check shared by every validator: non-empty with a letter."""
    return bool(text) and bool(_HAS_LETTER.search(text))


# =============================================================================
# Markup text content
# =============================================================================


def _decide_markup_text(candidate: Candidate) -> Verdict:
    if not has_letters(candidate.text):
        return Verdict(False, EMPTY_REASON)
    return Verdict(True, "JSX text content is always user-facing")


JSX_TEXT_CONTENT = Validator(
    name="jsx-text-content",
    description="JSX Text Content - Text between JSX tags is always user-facing",
    priority=Priority.HIGH,
    applies=lambda c: c.context_kind == ContextKind.MARKUP_TEXT,
    decide=_decide_markup_text,
    precondition="Not JSX text content",
)


# =============================================================================
# Accessibility attributes
# =============================================================================

ACCESSIBILITY_ATTRIBUTES = frozenset({"alt", "aria-label"})


def _decide_accessibility(candidate: Candidate) -> Verdict:
    if not has_letters(candidate.text):
        return Verdict(False, EMPTY_REASON)
    name = candidate.attribute_name
    if name not in ACCESSIBILITY_ATTRIBUTES:
        return Verdict(False, f'Attribute "{name}" is not an accessibility label')
    return Verdict(True, f'Accessibility attribute "{name}" is read to users')


JSX_ACCESSIBILITY = Validator(
    name="accessibility-attributes",
    description="Accessibility Attributes - alt and aria-label text",
    priority=Priority.HIGH,
    applies=lambda c: bool(c.attribute_name),
    decide=_decide_accessibility,
    precondition="No attribute name provided",
)


# =============================================================================
# Semantic variable names
# =============================================================================

SEMANTIC_KEYWORDS: tuple[str, ...] = (
    "message",
    "text",
    "notification",
    "alert",
    "title",
    "description",
    "label",
)


def _decide_variable(candidate: Candidate) -> Verdict:
    if not has_letters(candidate.text):
        return Verdict(False, EMPTY_REASON)
    name = candidate.variable_name or ""
    lowered = name.lower()
    for keyword in SEMANTIC_KEYWORDS:
        if keyword in lowered:
            return Verdict(True, f'Variable "{name}" contains semantic keyword "{keyword}"')
    return Verdict(
        False,
        f'Variable "{name}" does not contain semantic keywords: {", ".join(SEMANTIC_KEYWORDS)}',
    )


USER_MESSAGE_VARIABLES = Validator(
    name="user-message-variables",
    description="User Message Variables - Variables with semantic names containing keywords",
    priority=Priority.HIGH,
    applies=lambda c: bool(c.variable_name),
    decide=_decide_variable,
    precondition="No variable name provided",
)


# =============================================================================
# Object properties
# =============================================================================

USER_FACING_PROPERTIES = frozenset({
    "message",
    "text",
    "label",
    "title",
    "description",
    "placeholder",
    "tooltip",
    "error",
    "success",
    "warning",
    "info",
})


def _decide_property(candidate: Candidate) -> Verdict:
    if not has_letters(candidate.text):
        return Verdict(False, EMPTY_REASON)
    name = candidate.property_name
    if name not in USER_FACING_PROPERTIES:
        return Verdict(False, f'Property "{name}" is not user-facing')
    return Verdict(True, f'Property "{name}" holds user-facing text')


OBJECT_PROPERTIES = Validator(
    name="object-properties",
    description="User-facing Object Properties - Only whitelisted property keys",
    priority=Priority.HIGH,
    applies=lambda c: bool(c.property_name),
    decide=_decide_property,
    precondition="No property name provided",
)


# =============================================================================
# Form validation messages
# =============================================================================

VALIDATION_PROPERTIES = frozenset({
    "required",
    "email",
    "password",
    "minLength",
    "maxLength",
    "pattern",
    "min",
    "max",
    "invalid",
    "valid",
    "format",
    "match",
    "confirm",
    "unique",
    "exists",
})

_VALIDATION_VARIABLE = re.compile(
    r"validation|error|invalid|required|check|verify|confirm|validate", re.I
)

_VALIDATION_MESSAGE = re.compile(
    r"required|invalid|must be|cannot be|should be|please enter|please provide|"
    r"field is|characters?|minimum|maximum|at least|no more than|does not match|"
    r"already exists|not found|too short|too long|format",
    re.I,
)


def _decide_form_validation(candidate: Candidate) -> Verdict:
    if not has_letters(candidate.text):
        return Verdict(False, EMPTY_REASON)
    if candidate.property_name in VALIDATION_PROPERTIES:
        return Verdict(True, f'Validation rule "{candidate.property_name}" message is shown to users')
    if candidate.variable_name and _VALIDATION_VARIABLE.search(candidate.variable_name):
        return Verdict(True, f'Variable "{candidate.variable_name}" holds a validation message')
    if _VALIDATION_MESSAGE.search(candidate.text):
        return Verdict(True, "Text reads as a validation message")
    return Verdict(False, "Not a validation message")


FORM_VALIDATION = Validator(
    name="form-validation",
    description="Form Validation Messages - Validation and error message strings",
    priority=Priority.HIGH,
    applies=lambda c: (
        c.context_kind == ContextKind.FORM_FIELD or bool(c.property_name) or bool(c.variable_name)
    ),
    decide=_decide_form_validation,
    precondition="No form field, property, or variable context",
)


# =============================================================================
# Component props
# =============================================================================

USER_FACING_PROPS = frozenset({
    "title",
    "message",
    "text",
    "content",
    "description",
    "confirmText",
    "cancelText",
    "submitText",
    "tooltip",
    "placeholder",
    "label",
    "errorText",
    "successText",
    "warningText",
    "infoText",
    "helperText",
    "hintText",
    "statusText",
    "actionText",
    "buttonText",
})

_PROP_TECHNICAL = (
    re.compile(r"(true|false)", re.I),
    re.compile(r"[\d.,]+"),
    re.compile(r"#[0-9a-fA-F]{3,8}"),
    re.compile(r"(left|right|top|bottom|center)", re.I),
    re.compile(r"(sm|md|lg|xl|xs)", re.I),
    re.compile(r"(none|auto|inherit|initial)", re.I),
)

_ASCII_WORD = re.compile(r"[A-Za-z]+")


def is_user_facing_prop_text(text: str) -> bool:
    """Natural-language filter for component prop values."""
    trimmed = text.strip()
    if len(trimmed) <= 1:
        return False
    if _ASCII_WORD.fullmatch(trimmed) and len(trimmed) < 4:
        return False
    if any(p.fullmatch(trimmed) for p in _PROP_TECHNICAL):
        return False
    if "/" in text or "@" in text or "\\" in text:
        return False
    if not _HAS_LETTER.search(text):
        return False

    has_spaces = re.search(r"\s", text) is not None
    has_punctuation = re.search(r"[.!?:,]", text) is not None
    has_capital = re.search(r"[A-Z]", text) is not None
    return has_spaces or has_punctuation or (len(trimmed) >= 3 and has_capital)


def _decide_component_prop(candidate: Candidate) -> Verdict:
    if not has_letters(candidate.text):
        return Verdict(False, EMPTY_REASON)
    name = candidate.attribute_name
    if name not in USER_FACING_PROPS:
        return Verdict(False, f'Prop "{name}" is not user-facing')
    if not is_user_facing_prop_text(candidate.text):
        return Verdict(False, "Text does not appear to be user-facing content")
    return Verdict(True, f'User-facing prop "{name}" contains translatable text')


COMPONENT_PROPS = Validator(
    name="component-props",
    description="Component Props - Whitelisted user-facing props with natural-language text",
    priority=Priority.MEDIUM,
    applies=lambda c: bool(c.attribute_name),
    decide=_decide_component_prop,
    precondition="No attribute name provided",
)


# =============================================================================
# Alert / confirm / prompt messages
# =============================================================================

ALERT_FUNCTIONS = frozenset({"alert", "confirm", "prompt"})

DEVELOPER_FUNCTIONS = frozenset({
    "console.log",
    "console.debug",
    "console.info",
    "console.warn",
    "console.error",
    "console.trace",
    "console.time",
    "console.timeEnd",
    "console.assert",
    "console.count",
    "console.dir",
    "console.table",
})

_ALERT_TECHNICAL_FULL = (
    re.compile(r"(true|false)", re.I),
    re.compile(r"[\d.,\-+]+"),
    re.compile(r"(ok|yes|no|on|off)", re.I),
    re.compile(r"(test|debug|dev|prod)", re.I),
    re.compile(r"[A-Z_]+"),
    re.compile(r"\[.*\]"),
    re.compile(r"\{.*\}"),
)
_KEY_VALUE = re.compile(r"\w+:\w+", re.ASCII)
_SHORT_IDENTIFIER = re.compile(r"[A-Za-z_]+")


def is_user_facing_alert_text(text: str) -> bool:
    """Stricter natural-language filter for alert/confirm/prompt messages."""
    trimmed = text.strip()
    if len(trimmed) <= 2:
        return False
    if _SHORT_IDENTIFIER.fullmatch(trimmed) and len(trimmed) < 5:
        return False
    if any(p.fullmatch(trimmed) for p in _ALERT_TECHNICAL_FULL):
        return False
    if _KEY_VALUE.match(trimmed):
        return False
    if "/" in text or "@" in text or "\\" in text or "://" in text:
        return False
    if not _HAS_LETTER.search(text):
        return False

    has_spaces = re.search(r"\s", text) is not None
    has_punctuation = re.search(r"[.!?:,]", text) is not None
    has_question = "?" in text
    has_exclamation = "!" in text
    has_capital = re.search(r"[A-Z]", text) is not None
    return (
        has_spaces
        or has_punctuation
        or has_question
        or has_exclamation
        or (len(trimmed) >= 5 and has_capital)
    )


def _decide_alert(candidate: Candidate) -> Verdict:
    if not has_letters(candidate.text):
        return Verdict(False, EMPTY_REASON)
    name = candidate.function_name or ""
    if name in DEVELOPER_FUNCTIONS:
        return Verdict(False, f'Developer function "{name}" should not be translated')
    if name not in ALERT_FUNCTIONS:
        return Verdict(False, f'Function "{name}" is not a user-facing alert')
    if not is_user_facing_alert_text(candidate.text):
        return Verdict(False, "Text does not appear to be user-facing message")
    return Verdict(True, f"User-facing {name}() message should be translated")


ALERT_MESSAGES = Validator(
    name="alert-messages",
    description="Alert Messages - alert(), confirm() and prompt() text",
    priority=Priority.MEDIUM,
    applies=lambda c: bool(c.function_name),
    decide=_decide_alert,
    precondition="No function call context provided",
)


DEFAULT_VALIDATORS: tuple[Validator, ...] = (
    JSX_TEXT_CONTENT,
    JSX_ACCESSIBILITY,
    USER_MESSAGE_VARIABLES,
    OBJECT_PROPERTIES,
    FORM_VALIDATION,
    COMPONENT_PROPS,
    ALERT_MESSAGES,
)


class ValidatorRegistry:
    """Ordered collection of validators.

    Iteration yields validators by priority (high first), then in the order
    they were registered.
    """

    def __init__(self, validators: tuple[Validator, ...] | list[Validator] = ()) -> None:
        self._validators: list[Validator] = []
        for validator in validators:
            self.register(validator)

    @classmethod
    def default(cls) -> "ValidatorRegistry":
        return cls(DEFAULT_VALIDATORS)

    def register(self, validator: Validator) -> None:
        """Add a validator.

        Raises:
            ValueError: If a validator with the same name exists.
        """
        if any(v.name == validator.name for v in self._validators):
            raise ValueError(f"Validator {validator.name} is already registered")
        self._validators.append(validator)

    def remove(self, name: str) -> bool:
        before = len(self._validators)
        self._validators = [v for v in self._validators if v.name != name]
        return len(self._validators) != before

    def get(self, name: str) -> Validator | None:
        for validator in self._validators:
            if validator.name == name:
                return validator
        return None

    def ordered(self) -> list[Validator]:
        # sorted() is stable, so registration order breaks priority ties
        return sorted(self._validators, key=lambda v: v.priority)

    def __iter__(self):
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self._validators)

    def summary(self) -> list[dict[str, str]]:
        return [
            {"name": v.name, "description": v.description, "priority": v.priority.label}
            for v in self.ordered()
        ]
