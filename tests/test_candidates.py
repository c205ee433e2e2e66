"""Tests for candidate collection, translation usage and i18n config."""

import pytest

from nextscope.i18n.candidates import (
    ContextKind,
    collect_candidates,
    collect_translation_usage,
    suggest_key,
)
from nextscope.i18n.config import I18nConfig

PROFILE = '''
import { useTranslation } from "react-i18next";
import * as yup from "yup";

type Variant = "primary" | "secondary";

const schema = yup.object({
  email: yup.string().required("Email is required"),
});

export function Profile() {
  const { t } = useTranslation();
  const welcomeMessage = "Good to see you again";
  const toast = { success: "Profile updated" };
  return (
    <div className="profile" title="Your profile">
      <h1>{t("profile.title", "Profile")}</h1>
      <p>Edit your details below</p>
      {"Inline text"}
      <input placeholder="Enter your email" />
      <button onClick={() => confirm("Are you sure?")}>Save</button>
    </div>
  );
}
'''


class TestCollectCandidates:
    """Tests for collect_candidates."""

    def test_document_order_and_contexts(self, parse) -> None:
        candidates = collect_candidates(parse(PROFILE), I18nConfig())

        assert [(c.text, c.context_kind) for c in candidates] == [
            ("Email is required", ContextKind.FORM_FIELD),
            ("Good to see you again", ContextKind.VARIABLE_INITIALIZER),
            ("Profile updated", ContextKind.OBJECT_PROPERTY_VALUE),
            ("profile", ContextKind.MARKUP_ATTRIBUTE),
            ("Your profile", ContextKind.MARKUP_ATTRIBUTE),
            ("Edit your details below", ContextKind.MARKUP_TEXT),
            ("Inline text", ContextKind.MARKUP_TEXT),
            ("Enter your email", ContextKind.MARKUP_ATTRIBUTE),
            ("Are you sure?", ContextKind.CALL_ARGUMENT),
            ("Save", ContextKind.MARKUP_TEXT),
        ]

    def test_context_names(self, parse) -> None:
        by_text = {c.text: c for c in collect_candidates(parse(PROFILE), I18nConfig())}

        assert by_text["Email is required"].property_name == "required"
        assert by_text["Good to see you again"].variable_name == "welcomeMessage"
        assert by_text["Profile updated"].property_name == "success"
        assert by_text["Your profile"].attribute_name == "title"
        assert by_text["Edit your details below"].element_name == "p"
        assert by_text["Inline text"].element_name == "div"
        assert by_text["Are you sure?"].function_name == "confirm"
        assert by_text["Save"].component == "Profile"
        assert by_text["Email is required"].component is None
        assert by_text["Save"].line == 21

    def test_jsx_text_toggle(self, parse) -> None:
        config = I18nConfig.from_options({"jsx_text": False})

        kinds = {c.context_kind for c in collect_candidates(parse(PROFILE), config)}

        assert ContextKind.MARKUP_TEXT not in kinds
        assert ContextKind.MARKUP_ATTRIBUTE in kinds

    def test_string_literal_toggle(self, parse) -> None:
        config = I18nConfig.from_options({"string_literals": False})

        kinds = {c.context_kind for c in collect_candidates(parse(PROFILE), config)}

        assert kinds == {ContextKind.MARKUP_TEXT, ContextKind.MARKUP_ATTRIBUTE}

    def test_min_length(self, parse) -> None:
        config = I18nConfig.from_options({"min_length": 5})

        texts = [c.text for c in collect_candidates(parse(PROFILE), config)]

        assert "Save" not in texts
        assert "Are you sure?" in texts

    def test_excluded_strings_are_not_candidates(self, parse) -> None:
        source = '''
const styles = { color: "#ff0000", width: "100px" };
const docsUrl = "https://example.com/docs";
const ENV = "NEXT_PUBLIC_API";
'''
        assert collect_candidates(parse(source, "styles.ts"), I18nConfig()) == []

    def test_template_strings_keep_static_text(self, parse) -> None:
        source = "const greetingText = `Hello ${name}, welcome`;\n"

        [candidate] = collect_candidates(parse(source, "greet.ts"), I18nConfig())

        assert candidate.text == "Hello ${...}, welcome"
        assert candidate.template


class TestTranslationUsage:
    """Tests for collect_translation_usage."""

    def test_keys_and_default_values(self, parse) -> None:
        source = '''
t("home.title");
t("home.subtitle", "Start here");
i18n.t("home.cta", { defaultValue: "Get started" });
i18n.t(`items.${kind}`);
translate(key);
'''
        usages = collect_translation_usage(parse(source, "usage.ts"), I18nConfig())

        assert [(u.function_name, u.key, u.default_value) for u in usages] == [
            ("t", "home.title", None),
            ("t", "home.subtitle", "Start here"),
            ("i18n.t", "home.cta", "Get started"),
            ("i18n.t", "items.${...}", None),
        ]
        assert [u.is_dynamic for u in usages] == [False, False, False, True]
        assert usages[0].line == 2

    def test_custom_function_names(self, parse) -> None:
        config = I18nConfig.from_options({"functions": "tr, intl.formatMessage"})

        usages = collect_translation_usage(parse('tr("a.b"); t("c.d");\n', "x.ts"), config)

        assert [u.key for u in usages] == ["a.b"]


class TestI18nConfig:
    """Tests for I18nConfig option parsing and exclusion rules."""

    def test_defaults(self) -> None:
        config = I18nConfig.from_options(None)
        assert config.translation_functions == ("t", "translate", "$t", "i18n.t", "i18next.t")
        assert config.min_string_length == 3

    def test_list_and_comma_separated_options(self) -> None:
        config = I18nConfig.from_options({"functions": ["t", "tr"], "languages": "en, pt-BR"})
        assert config.translation_functions == ("t", "tr")
        assert config.languages == ("en", "pt-BR")

    @pytest.mark.parametrize("value", [0, -1, "3", True])
    def test_invalid_min_length(self, value: object) -> None:
        with pytest.raises(ValueError, match="min_length must be a positive integer"):
            I18nConfig.from_options({"min_length": value})

    @pytest.mark.parametrize(
        ("text", "rule"),
        [
            ("https://example.com", "url"),
            ("#ffffff", "color"),
            ("12px", "css-unit"),
            ("console.log", "browser-api"),
            ("aria-hidden", "markup-attribute"),
            ("logo.svg", "file-extension"),
            ("NEXT_PUBLIC_URL", "env-variable"),
            ("MAX_ITEMS", "constant"),
            ("Hello there", None),
        ],
    )
    def test_exclusion_rules(self, text: str, rule: str | None) -> None:
        assert I18nConfig().excluded_by(text) == rule

    def test_extra_exclude_substrings(self) -> None:
        config = I18nConfig.from_options({"exclude": "lorem"})
        assert config.excluded_by("lorem ipsum") == "pattern:lorem"
        assert not config.is_candidate_text("lorem ipsum")


def test_suggest_key() -> None:
    assert suggest_key("Click the button to continue!") == "click.the.button.to.continue"


EDITOR = r'''
export function Editor() {
  const { t } = useTranslation();
  const onReset = () => {
    if (confirm('Can\'t undo this. Continue?')) {
      alert("Saved.\nReload?");
    }
  };
  return (
    <Modal title={'Don\'t save'} label="Fish &amp; Chips" onClose={onReset}>
      {t("editor.hint", 'It\'s autosaved')}
    </Modal>
  );
}
'''


class TestEscapedStrings:
    """Escapes and entities reach candidates and usages decoded."""

    def test_candidate_text_is_decoded(self, parse) -> None:
        candidates = collect_candidates(parse(EDITOR), I18nConfig())

        assert [c.text for c in candidates] == [
            "Can't undo this. Continue?",
            "Saved.\nReload?",
            "Don't save",
            "Fish & Chips",
        ]

    def test_default_value_is_decoded(self, parse) -> None:
        [usage] = collect_translation_usage(parse(EDITOR), I18nConfig())

        assert usage.key == "editor.hint"
        assert usage.default_value == "It's autosaved"

    def test_suggested_key_from_decoded_text(self) -> None:
        assert suggest_key("Don't save") == "dont.save"
