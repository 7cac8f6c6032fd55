"""Tests for email models and payload parsing."""

from datetime import datetime, timedelta, timezone

from reply_context.mail.models import (
    NO_SUBJECT,
    ContextEmail,
    IncomingEmail,
    SenderContext,
    StoredEmail,
    ThreadContext,
    parse_timestamp,
)


def _make_incoming(
    message_id: str, from_address: str = "alice@example.com", received_at: str | None = None
) -> IncomingEmail:
    return IncomingEmail(
        message_id=message_id,
        from_address=from_address,
        subject="Hello",
        body="Body text",
        received_at=received_at,
    )


def _make_stored(
    message_id: str, subject: str | None = "Hello", body: str | None = "Body text"
) -> StoredEmail:
    return StoredEmail(
        id=f"row-{message_id}",
        user_id="user-1",
        message_id=message_id,
        from_address="alice@example.com",
        subject=subject,
        body=body,
    )


class TestParseTimestamp:
    def test_iso_with_z(self):
        assert parse_timestamp("2024-01-01T10:00:00Z") == datetime(
            2024, 1, 1, 10, 0, tzinfo=timezone.utc
        )

    def test_iso_with_offset_converted_to_utc(self):
        assert parse_timestamp("2024-01-01T12:00:00+02:00") == datetime(
            2024, 1, 1, 10, 0, tzinfo=timezone.utc
        )

    def test_rfc2822(self):
        assert parse_timestamp("Mon, 01 Jan 2024 10:00:00 +0000") == datetime(
            2024, 1, 1, 10, 0, tzinfo=timezone.utc
        )

    def test_naive_is_utc(self):
        assert parse_timestamp(datetime(2024, 1, 1, 10, 0)).tzinfo == timezone.utc

    def test_aware_datetime(self):
        value = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert parse_timestamp(value) == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_empty_or_garbage(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None
        assert parse_timestamp("yesterday-ish") is None


class TestIncomingEmail:
    def test_from_webhook_payload(self):
        email = IncomingEmail.from_payload(
            {
                "messageId": "m1",
                "threadId": "t1",
                "from": '"J. Doe" <j.doe@x.com>',
                "to": "me@example.com",
                "subject": "Hi",
                "body": "Hello there",
                "snippet": "Hello",
                "receivedAt": "2024-01-01T10:00:00Z",
                "labels": ["INBOX"],
            }
        )
        assert email.message_id == "m1"
        assert email.thread_id == "t1"
        assert email.from_address == '"J. Doe" <j.doe@x.com>'
        assert email.to == "me@example.com"
        assert email.received_at == "2024-01-01T10:00:00Z"
        assert email.labels == ["INBOX"]

    def test_snake_case_and_missing_fields(self):
        email = IncomingEmail.from_payload({"message_id": "m2", "from_address": "a@x.com"})
        assert email.message_id == "m2"
        assert email.from_address == "a@x.com"
        assert email.thread_id is None
        assert email.subject == ""
        assert email.body == ""
        assert email.labels == []

    def test_empty_thread_id_is_none(self):
        assert IncomingEmail.from_payload({"messageId": "m", "threadId": ""}).thread_id is None


class TestContextEmail:
    def test_from_incoming_is_current(self):
        email = ContextEmail.from_incoming(
            _make_incoming("m1", from_address='"J. Doe" <J.Doe@X.com>', received_at="bad")
        )
        assert email.id == ""
        assert email.is_current_email is True
        assert email.from_email == "j.doe@x.com"
        assert email.received_at is None

    def test_from_incoming_defaults_subject(self):
        email = ContextEmail.from_incoming(IncomingEmail(message_id="m1", from_address="a@x.com"))
        assert email.subject == NO_SUBJECT

    def test_from_stored_defaults_subject(self):
        email = ContextEmail.from_stored(_make_stored("m1", subject=None))
        assert email.subject == NO_SUBJECT
        assert email.is_current_email is False
        assert email.id == "row-m1"

    def test_content_prefers_body(self):
        email = ContextEmail.from_stored(_make_stored("m1", body="Body"))
        email.snippet = "Snip"
        assert email.content == "Body"
        email.body = None
        assert email.content == "Snip"
        email.snippet = None
        assert email.content == ""


class TestCounts:
    def test_email_count_tracks_emails(self):
        thread = ThreadContext(thread_id="t", emails=[ContextEmail.from_stored(_make_stored("m1"))])
        sender = SenderContext(sender_email="a@x.com", sender_name="A")
        assert thread.email_count == 1
        assert sender.email_count == 0
