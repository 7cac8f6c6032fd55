"""Tests for sender address normalization."""

from reply_context.mail.address import (
    UNKNOWN_ADDRESS,
    UNKNOWN_NAME,
    extract_display_name,
    extract_email_address,
)


class TestExtractEmailAddress:
    def test_quoted_name_with_brackets(self):
        assert extract_email_address('"J. Doe" <j.doe@x.com>') == "j.doe@x.com"

    def test_brackets_are_lowercased_and_trimmed(self):
        assert extract_email_address("Jane < Jane.Roe@Example.COM >") == "jane.roe@example.com"

    def test_bare_address(self):
        assert extract_email_address("Bob@Example.org") == "bob@example.org"

    def test_address_inside_free_text(self):
        assert extract_email_address("reach Bob.Smith+news@mail.example.org today") == (
            "bob.smith+news@mail.example.org"
        )

    def test_no_address_falls_back_to_input(self):
        assert extract_email_address("  Mailer Daemon  ") == "mailer daemon"

    def test_empty_and_none(self):
        assert extract_email_address("") == UNKNOWN_ADDRESS
        assert extract_email_address(None) == UNKNOWN_ADDRESS


class TestExtractDisplayName:
    def test_quoted_name(self):
        assert extract_display_name('"J. Doe" <j.doe@x.com>') == "J. Doe"

    def test_unquoted_name(self):
        assert extract_display_name("Jane Roe <jane@example.com>") == "Jane Roe"

    def test_no_name_returns_address(self):
        assert extract_display_name("Jane@Example.com") == "jane@example.com"
        assert extract_display_name("<jane@example.com>") == "jane@example.com"

    def test_blank_name_returns_address(self):
        assert extract_display_name('"" <jane@example.com>') == "jane@example.com"

    def test_empty_and_none(self):
        assert extract_display_name("") == UNKNOWN_NAME
        assert extract_display_name(None) == UNKNOWN_NAME
