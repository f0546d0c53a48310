"""
Tests for the sanitization gate and the URL-validation gate.

Covers:
- No script/style/object/embed/link/meta survives, script content included
- No on* handler, style or data-* attribute survives
- Unsafe href/src values are dropped
- Sanitization is idempotent
- URL gate accepts http/https/mailto/tel only
"""

from __future__ import annotations

import pytest

from fixer_cms.components.richtext import (
    DEFAULT_CONFIG,
    RichTextConfig,
    RichTextService,
    SanitizeHtmlInput,
    ValidateUrlInput,
    build_config,
    create_rich_text_service,
    get_message,
    is_safe_uri,
    is_valid_url,
    run,
    run_sanitize,
    run_validate_url,
    sanitize_html,
    strip_tags,
)

# --- Fixtures ---


HOSTILE_SAMPLES = [
    "<p>Hello</p><script>alert(1)</script>",
    "<SCRIPT SRC=//evil.example/x.js></SCRIPT><p>x</p>",
    '<img src=x onerror="alert(1)">',
    '<p onclick="steal()" onmouseover="x()">Hi</p>',
    '<a href="javascript:alert(1)">click</a>',
    '<a href="JaVaScRiPt:alert(1)">click</a>',
    '<a href="java&#x09;script:alert(1)">click</a>',
    '<iframe src="data:text/html;base64,PHNjcmlwdD4="></iframe>',
    '<style>body{display:none}</style><p style="color:red">styled</p>',
    '<object data="x.swf"></object><embed src="x.swf">',
    '<link rel="stylesheet" href="x.css"><meta http-equiv="refresh" content="0">',
    '<p data-track="1" data-x="y">tracked</p>',
    "<svg><script>alert(1)</script></svg>",
    '<iframe src="https://x"><script>alert(1)</script></iframe>',
    '<iframe src="https://x"><style>p{color:red}</style></iframe><p>after</p>',
    '<iframe title="a>b" src="https://x"><script>alert(1)</script></iframe>',
    "<IFRAME><script>alert(1)</script>",
    "<p>unclosed <strong>bold <em>nested",
    '<a href="vbscript:msgbox(1)">vb</a>',
    "<!-- comment --><p>after comment</p>",
]


@pytest.fixture
def service() -> RichTextService:
    return create_rich_text_service()


# --- Sanitize: required examples ---


class TestSanitizeExamples:
    """Concrete input/output pairs."""

    def test_script_removed_with_content(self) -> None:
        """Script element and its text disappear; preceding markup is kept."""
        assert sanitize_html("<p>Hello</p><script>alert(1)</script>") == "<p>Hello</p>"

    def test_style_element_removed_with_content(self) -> None:
        """Style element content is removed, not escaped."""
        result = sanitize_html("<style>p{color:red}</style><p>Text</p>")
        assert result == "<p>Text</p>"

    def test_onclick_stripped(self) -> None:
        """Event handlers are removed from allowed tags."""
        assert sanitize_html('<p onclick="alert(1)">Hi</p>') == "<p>Hi</p>"

    def test_style_attribute_stripped(self) -> None:
        assert sanitize_html('<span style="color:red">Hi</span>') == "<span>Hi</span>"

    def test_data_attributes_stripped(self) -> None:
        assert sanitize_html('<p data-id="7">Hi</p>') == "<p>Hi</p>"

    def test_disallowed_tag_unwrapped(self) -> None:
        """Unknown tags are dropped but their text is kept."""
        assert sanitize_html("<div><p>Hi</p></div>") == "<p>Hi</p>"

    def test_font_passes_gate_as_text_only(self) -> None:
        """<font> is not allowed; without pre-clean only its text survives."""
        assert sanitize_html('<font color="red">Hi</font>') == "Hi"

    def test_allowed_markup_unchanged(self) -> None:
        html = "<h2>כותרת</h2><p>שלום <strong>עולם</strong> <em>x</em></p><ul><li>a</li></ul>"
        assert sanitize_html(html) == html

    def test_safe_link_kept(self) -> None:
        html = '<a href="https://eran-fixer.com/" target="_blank" rel="noopener noreferrer">x</a>'
        assert sanitize_html(html) == html

    def test_relative_link_kept(self) -> None:
        assert sanitize_html('<a href="/blog/seo">x</a>') == '<a href="/blog/seo">x</a>'

    def test_javascript_href_dropped(self) -> None:
        """The link text stays, the dangerous href does not."""
        result = sanitize_html('<a href="javascript:alert(1)">click</a>')
        assert "javascript" not in result.lower()
        assert "click" in result

    def test_video_with_source_kept(self) -> None:
        html = '<video controls=""><source src="/v.mp4" type="video/mp4"></video>'
        result = sanitize_html(html)
        assert "<video" in result
        assert 'src="/v.mp4"' in result
        assert 'type="video/mp4"' in result

    def test_iframe_children_dropped(self) -> None:
        """Raw text inside an iframe never reaches the output."""
        result = sanitize_html('<iframe src="https://x"><script>alert(1)</script></iframe><p>a</p>')
        assert result == '<iframe src="https://x"></iframe><p>a</p>'

    def test_iframe_with_bracket_in_attribute(self) -> None:
        result = sanitize_html('<iframe title="a>b" src="https://x">x<b>y</b></iframe><p>z</p>')
        assert "<b>" not in result
        assert result.endswith("</iframe><p>z</p>")

    def test_blank_input(self) -> None:
        assert sanitize_html("") == ""
        assert sanitize_html("   ") == ""
        assert sanitize_html(None) == ""

    def test_comments_removed(self) -> None:
        assert sanitize_html("<!-- x --><p>a</p>") == "<p>a</p>"


# --- Sanitize: properties over hostile samples ---


class TestSanitizeProperties:
    """Invariants that must hold for every output."""

    @pytest.mark.parametrize("html", HOSTILE_SAMPLES)
    def test_no_script_survives(self, html: str) -> None:
        assert "<script" not in sanitize_html(html).lower()

    @pytest.mark.parametrize("html", HOSTILE_SAMPLES)
    def test_no_event_handler_survives(self, html: str) -> None:
        result = sanitize_html(html).lower()
        for handler in ("onclick", "onerror", "onmouseover", "onload"):
            assert handler not in result

    @pytest.mark.parametrize("html", HOSTILE_SAMPLES)
    def test_no_style_survives(self, html: str) -> None:
        result = sanitize_html(html).lower()
        assert "<style" not in result
        assert "style=" not in result

    @pytest.mark.parametrize("html", HOSTILE_SAMPLES)
    def test_no_dangerous_scheme_survives(self, html: str) -> None:
        result = sanitize_html(html).lower()
        assert "javascript:" not in result
        assert "vbscript:" not in result
        assert "data:" not in result

    @pytest.mark.parametrize("html", HOSTILE_SAMPLES)
    def test_forbidden_elements_never_survive(self, html: str) -> None:
        result = sanitize_html(html).lower()
        for tag in ("<object", "<embed", "<link", "<meta"):
            assert tag not in result

    @pytest.mark.parametrize("html", HOSTILE_SAMPLES)
    def test_idempotent(self, html: str) -> None:
        once = sanitize_html(html)
        assert sanitize_html(once) == once

    def test_malformed_html_does_not_raise(self) -> None:
        for html in ["<", "<<p>>", "</p></p>", "<a href=", "<p <p>", "\x00<p>x</p>"]:
            sanitize_html(html)


# --- URI checks ---


class TestSafeUri:
    """Pattern applied to href/src inside the gate."""

    @pytest.mark.parametrize(
        "value",
        ["https://x.com", "http://x.com", "mailto:a@b.com", "tel:+972501234567", "/path", "#top",
         "page.html", "../up", ""],
    )
    def test_safe(self, value: str) -> None:
        assert is_safe_uri(value)

    @pytest.mark.parametrize(
        "value",
        ["javascript:alert(1)", "JAVASCRIPT:x", " javascript:x", "java\tscript:x",
         "java&#x09;script:x", "vbscript:x", "data:text/html,x", "file:///etc/passwd"],
    )
    def test_unsafe(self, value: str) -> None:
        assert not is_safe_uri(value)


class TestUrlGate:
    """Secondary gate for user-entered link/image URLs."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://eran-fixer.com",
            "http://example.com/path?q=1#x",
            "https://example.co.il/עברית",
            "mailto:info@eran-fixer.com",
            "tel:+972-50-123-4567",
            "  https://example.com  ",
        ],
    )
    def test_valid(self, url: str) -> None:
        assert is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "javascript:alert(1)",
            "JavaScript:alert(1)",
            "data:text/html,<script>alert(1)</script>",
            "vbscript:msgbox(1)",
            "ftp://example.com/file",
            "/relative/path",
            "example.com",
            "",
            "   ",
            None,
            "https://",
            "http:///path",
            "mailto:",
            "tel:",
            "https://exa mple.com",
            "java\nscript:alert(1)",
            "https://example.com:99999",
        ],
    )
    def test_invalid(self, url: str | None) -> None:
        assert not is_valid_url(url)

    def test_schemes_follow_config(self) -> None:
        config = RichTextConfig(url_schemes=frozenset(["https"]))
        assert is_valid_url("https://x.com", config)
        assert not is_valid_url("http://x.com", config)


# --- Config ---


class TestRichTextConfig:
    """The allow-list refuses entries that would break the gate."""

    def test_forbidden_tag_rejected(self) -> None:
        with pytest.raises(ValueError, match="Forbidden tags"):
            RichTextConfig(allow_tags=frozenset(["p", "script"]))

    def test_event_handler_attribute_rejected(self) -> None:
        with pytest.raises(ValueError, match="Forbidden attributes"):
            RichTextConfig(allow_attrs=frozenset(["href", "onclick"]))

    def test_style_attribute_rejected(self) -> None:
        with pytest.raises(ValueError, match="Forbidden attributes"):
            RichTextConfig(allow_attrs=frozenset(["style"]))

    def test_narrower_allow_list_applies(self) -> None:
        config = RichTextConfig(allow_tags=frozenset(["p"]))
        assert sanitize_html("<p><strong>x</strong></p>", config) == "<p>x</p>"

    def test_build_config_from_rules(self, rules_adapter) -> None:
        config = build_config(rules_adapter)
        assert "iframe" in config.allow_tags
        assert "class" in config.allow_attrs
        assert config.url_schemes == frozenset(["http", "https", "mailto", "tel"])

    def test_build_config_without_rules(self) -> None:
        assert build_config(None) is DEFAULT_CONFIG


# --- Helpers ---


class TestStripTags:
    def test_text_only(self) -> None:
        assert strip_tags("<p>Hello <strong>world</strong></p><p>again</p>") == "Hello world again"

    def test_script_content_not_included(self) -> None:
        assert strip_tags("<p>a</p><script>b()</script>") == "a"

    def test_iframe_content_not_included(self) -> None:
        assert strip_tags('<p>a</p><iframe src="https://x"><script>b()</script></iframe>') == "a"

    def test_entities_decoded(self) -> None:
        assert strip_tags("<p>a &amp; b</p>") == "a & b"


class TestService:
    def test_service_binds_config(self, service: RichTextService) -> None:
        assert service.config is DEFAULT_CONFIG
        assert service.sanitize("<p>x</p><script>y</script>") == "<p>x</p>"
        assert service.is_valid_url("https://x.com")
        assert not service.is_safe_uri("javascript:x")


# --- Component Entry Points ---


class TestRunSanitize:
    def test_clean_input(self) -> None:
        result = run_sanitize(SanitizeHtmlInput(html="<p>Hi</p>"))
        assert result.success
        assert result.html == "<p>Hi</p>"
        assert result.stripped_to_empty is False

    def test_stripped_to_empty_is_not_an_error(self) -> None:
        """Only a script: empty output, success, flagged for information."""
        result = run_sanitize(SanitizeHtmlInput(html="<script>alert(1)</script>"))
        assert result.success
        assert result.errors == []
        assert result.html == ""
        assert result.stripped_to_empty is True

    def test_blank_input_not_flagged(self) -> None:
        result = run_sanitize(SanitizeHtmlInput(html=""))
        assert result.html == ""
        assert result.stripped_to_empty is False

    def test_uses_rules(self, rules_adapter) -> None:
        html = '<iframe src="https://youtube.com/embed/x"></iframe>'
        result = run_sanitize(SanitizeHtmlInput(html=html), rules=rules_adapter)
        assert "<iframe" in result.html


class TestRunValidateUrl:
    def test_valid(self) -> None:
        result = run_validate_url(ValidateUrlInput(url="https://x.com"))
        assert result.is_valid
        assert result.errors == []

    def test_rejected_hebrew_message_by_default(self) -> None:
        result = run_validate_url(ValidateUrlInput(url="javascript:alert(1)"))
        assert not result.is_valid
        assert result.errors[0].code == "rejected_url"
        assert result.errors[0].field == "url"
        assert result.errors[0].message == get_message("rejected_url", "he")

    def test_rejected_english_message(self) -> None:
        result = run_validate_url(ValidateUrlInput(url="javascript:alert(1)", locale="en"))
        assert result.errors[0].message == get_message("rejected_url", "en")
        assert result.errors[0].message != get_message("rejected_url", "he")

    def test_blank_is_url_required(self) -> None:
        result = run_validate_url(ValidateUrlInput(url="  "))
        assert not result.is_valid
        assert result.errors[0].code == "url_required"

    def test_unknown_locale_falls_back(self) -> None:
        assert get_message("rejected_url", "fr") == get_message("rejected_url", "he")


class TestDispatcher:
    def test_dispatches(self) -> None:
        assert run(SanitizeHtmlInput(html="<p>x</p>")).html == "<p>x</p>"  # type: ignore[union-attr]
        assert run(ValidateUrlInput(url="tel:123")).is_valid  # type: ignore[union-attr]

    def test_unknown_input(self) -> None:
        with pytest.raises(ValueError, match="Unknown input type"):
            run("not an input")  # type: ignore[arg-type]
