from backend.llm.errors import UpstreamError
from backend.recommendations.sanitize import (
    ERROR_MAX_LENGTH,
    GENERIC_ERROR,
    PROMPT_MAX_LENGTH,
    sanitize_error_message,
    sanitize_for_prompt,
)


# ── Prompt text ──────────────────────────────────────────────────────────


class TestSanitizeForPrompt:
    def test_newlines_become_spaces(self):
        assert sanitize_for_prompt("parks\nmuseums\r\nzoos") == "parks museums zoos"

    def test_whitespace_collapsed_and_trimmed(self):
        assert sanitize_for_prompt("  lots   of\t\tspace  ") == "lots of space"

    def test_backticks_replaced(self):
        assert sanitize_for_prompt("```ignore```") == "'''ignore'''"

    def test_control_characters_removed(self):
        assert sanitize_for_prompt("ok\x00\x07\x7fay") == "okay"

    def test_truncated(self):
        assert len(sanitize_for_prompt("a" * 900)) == PROMPT_MAX_LENGTH

    def test_empty_and_none(self):
        assert sanitize_for_prompt("") == ""
        assert sanitize_for_prompt(None) == ""


# ── Error text ───────────────────────────────────────────────────────────


class TestSanitizeErrorMessage:
    def test_none_gives_generic_message(self):
        assert sanitize_error_message(None) == GENERIC_ERROR

    def test_paths_redacted(self):
        err = RuntimeError("cannot open /home/app/.env for reading")
        assert sanitize_error_message(err) == "cannot open [path] for reading"

    def test_python_stack_lines_redacted(self):
        err = RuntimeError('boom File "app.py", line 12, in handler')
        assert sanitize_error_message(err) == "boom [stack trace]"

    def test_js_stack_frames_redacted(self):
        msg = sanitize_error_message("failed at handler (server.js:10:5)")
        assert msg == "failed [stack trace]"

    def test_sensitive_words_redacted(self):
        msg = sanitize_error_message("bad API key, password or secret token")
        assert "[API_KEY]" in msg
        assert "[password]" in msg
        assert "[secret]" in msg
        assert "[token]" in msg

    def test_error_prefix_stripped(self):
        assert sanitize_error_message("Error: something broke") == "something broke"

    def test_long_messages_truncated(self):
        msg = sanitize_error_message("x" * 500)
        assert msg == "x" * ERROR_MAX_LENGTH + "..."

    def test_blank_message_gives_generic_message(self):
        assert sanitize_error_message(RuntimeError("")) == GENERIC_ERROR

    def test_uses_error_message_attribute(self):
        err = UpstreamError("Claude API error: overloaded", provider="anthropic")
        assert sanitize_error_message(err) == "Claude API error: overloaded"

    def test_details_add_class_name(self):
        err = UpstreamError("Claude API error: overloaded")
        assert sanitize_error_message(err, include_details=True) == (
            "UpstreamError: Claude API error: overloaded"
        )

    def test_details_ignored_for_plain_strings(self):
        assert sanitize_error_message("plain", include_details=True) == "plain"
