import pytest

from app.external.email_templates import TEMPLATES
from app.services.externals.email_service import EmailNotifier, NotificationError


class RecordingMailer:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages = []

    async def send_message(self, message):
        if self.fail:
            raise ConnectionError("SMTP down")
        self.messages.append(message)


@pytest.mark.asyncio
async def test_send_template_renders_code_email():
    mailer = RecordingMailer()
    notifier = EmailNotifier(mailer=mailer)

    await notifier.send_template("two_factor_code", "luis@sevispass.com", code="012345", user_name="Luis Kila")

    message = mailer.messages[0]
    assert message.subject == "SevisPass Login Verification - 2FA Code"
    assert "luis@sevispass.com" in str(message.recipients[0])
    assert "012345" in message.body
    assert "Luis Kila" in message.body


@pytest.mark.asyncio
async def test_send_template_raises_when_smtp_fails():
    notifier = EmailNotifier(mailer=RecordingMailer(fail=True))

    with pytest.raises(NotificationError):
        await notifier.send_template("verification_code", "luis@sevispass.com", code="123456")


@pytest.mark.asyncio
async def test_unknown_template_is_an_error():
    notifier = EmailNotifier(mailer=RecordingMailer())

    with pytest.raises(NotificationError):
        await notifier.send_template("welcome", "luis@sevispass.com")


@pytest.mark.asyncio
async def test_best_effort_does_not_raise():
    notifier = EmailNotifier(mailer=RecordingMailer(fail=True))

    sent = await notifier.send_best_effort(
        "appointment_cancellation",
        "luis@sevispass.com",
        user_name="Luis Kila",
        date="Monday, January 14, 2030",
        time="09:00",
        location="Lae Branch Office",
        address="456 Markham Road, Lae",
    )

    assert sent is False


def test_appointment_template_without_phone():
    subject, body = TEMPLATES["appointment_confirmation"](
        user_name="Luis Kila",
        date="Monday, January 14, 2030",
        time="09:00",
        location="Lae Branch Office",
        address="456 Markham Road, Lae",
    )

    assert subject == "Biometric Appointment Confirmed - SevisPass Digital ID"
    assert "Monday, January 14, 2030" in body
    assert "N/A" in body


@pytest.mark.asyncio
async def test_user_name_with_link_is_escaped_in_email():
    mailer = RecordingMailer()
    notifier = EmailNotifier(mailer=mailer)

    await notifier.send_template(
        "verification_code",
        "victim@sevispass.com",
        code="123456",
        user_name='<a href="https://evil.example/login">Click to re-verify</a>',
    )

    body = mailer.messages[0].body
    assert '<a href="https://evil.example/login">' not in body
    assert "&lt;a href=" in body
    assert "Click to re-verify" in body
    assert "123456" in body


@pytest.mark.asyncio
async def test_appointment_fields_are_escaped_in_email():
    mailer = RecordingMailer()
    notifier = EmailNotifier(mailer=mailer)

    await notifier.send_template(
        "appointment_confirmation",
        "luis@sevispass.com",
        user_name="Luis <script>alert(1)</script>",
        date="Monday, January 14, 2030",
        time="09:00",
        location="Lae Branch Office",
        address="456 Markham Road, Lae",
    )

    body = mailer.messages[0].body
    assert "<script>" not in body
    assert "&lt;script&gt;" in body
    assert "Lae Branch Office" in body
