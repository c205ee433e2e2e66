"""Tests for candidate classification through the validator registry."""

from nextscope.i18n.candidates import Candidate, ContextKind, collect_candidates
from nextscope.i18n.config import I18nConfig
from nextscope.i18n.pipeline import classify
from nextscope.i18n.validators import (
    JSX_TEXT_CONTENT,
    Priority,
    Validator,
    ValidatorRegistry,
    Verdict,
)


class TestClassify:
    """Tests for classify."""

    def test_prop_text_accepted_by_component_props(self) -> None:
        candidate = Candidate("Welcome back", ContextKind.MARKUP_ATTRIBUTE, attribute_name="title")

        decision = classify(candidate, ValidatorRegistry.default())

        assert decision.accepted
        assert decision.validator == "component-props"
        assert decision.reason == 'User-facing prop "title" contains translatable text'

    def test_rejection_reports_first_applicable_validator(self) -> None:
        candidate = Candidate("container", ContextKind.MARKUP_ATTRIBUTE, attribute_name="className")

        decision = classify(candidate, ValidatorRegistry.default())

        assert not decision.accepted
        assert decision.validator == "accessibility-attributes"
        assert decision.reason == 'Attribute "className" is not an accessibility label'

    def test_developer_logging_rejected(self) -> None:
        candidate = Candidate("auth debug output", ContextKind.CALL_ARGUMENT, function_name="console.log")

        decision = classify(candidate, ValidatorRegistry.default())

        assert not decision.accepted
        assert decision.reason == 'Developer function "console.log" should not be translated'

    def test_precondition_reason_when_nothing_applies(self) -> None:
        candidate = Candidate("Hello world", ContextKind.CALL_ARGUMENT)

        decision = classify(candidate, ValidatorRegistry.default())

        assert not decision.accepted
        assert decision.validator == "jsx-text-content"
        assert decision.reason == "Not JSX text content"
        assert all(not verdict.applicable for _, verdict in decision.trace)

    def test_higher_priority_acceptor_wins(self) -> None:
        """A LOW validator registered first still loses to a HIGH one."""
        catch_all = Validator(
            name="catch-all",
            description="Accepts everything",
            priority=Priority.LOW,
            applies=lambda c: True,
            decide=lambda c: Verdict(True, "caught"),
        )
        registry = ValidatorRegistry([catch_all, JSX_TEXT_CONTENT])

        decision = classify(Candidate("Click me", ContextKind.MARKUP_TEXT), registry)

        assert decision.validator == "jsx-text-content"
        assert [name for name, _ in decision.trace] == ["jsx-text-content", "catch-all"]

    def test_trace_covers_every_validator(self) -> None:
        registry = ValidatorRegistry.default()
        candidate = Candidate("Session expired", ContextKind.VARIABLE_INITIALIZER, variable_name="errorMessage")

        decision = classify(candidate, registry)

        assert decision.validator == "user-message-variables"
        assert len(decision.trace) == len(registry)

    def test_empty_registry(self) -> None:
        decision = classify(Candidate("Hello", ContextKind.MARKUP_TEXT), ValidatorRegistry())

        assert not decision.accepted
        assert decision.validator is None
        assert decision.reason == "No validators registered"


def test_escaped_strings_are_user_facing(parse) -> None:
    source = r'''
    export function Editor() {
      const onReset = () => {
        if (confirm('Can\'t undo this. Continue?')) {
          alert("Saved.\nReload?");
        }
      };
      return <Modal title={'Don\'t save'} onClose={onReset} />;
    }
    '''
    registry = ValidatorRegistry.default()

    decisions = {
        c.text: classify(c, registry) for c in collect_candidates(parse(source), I18nConfig())
    }

    assert {text: d.validator for text, d in decisions.items() if d.accepted} == {
        "Can't undo this. Continue?": "alert-messages",
        "Saved.\nReload?": "alert-messages",
        "Don't save": "component-props",
    }
