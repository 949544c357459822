"""
Tests for the email template engine.
"""
import pytest

from airfiber_billing.core.constants import NotificationType
from airfiber_billing.services.email_template_service import (
    NOTIFICATION_STYLES,
    ClientSnapshot,
    nl2br,
    render_email,
)

from .conftest import FIXED_NOW


@pytest.fixture
def snapshot():
    return ClientSnapshot(
        name="Ana",
        phone="AA:BB:CC:DD:EE:FF",
        amount="500",
        dueDate="2025-02-01",
        wifi="ana-wifi",
    )


def detail_values(html):
    """Values shown in the details block of the notice layout."""
    marker = '<span style="font-size:13px;color:#e5e7eb;">'
    return [chunk.split("</span>")[0] for chunk in html.split(marker)[1:]]


class TestNoticeLayout:
    def test_reminder_banner_and_details(self, snapshot):
        rendered = render_email(snapshot, "Please pay soon.", "reminder", now=FIXED_NOW)

        assert "background-color:#f97316" in rendered.html
        assert "Your payment is due soon" in rendered.html
        assert "Hi Ana," in rendered.html
        assert detail_values(rendered.html) == ["ana-wifi", "₱500", "2025-02-01", "AA:BB:CC:DD:EE:FF"]

    def test_disconnection_banner(self, snapshot):
        rendered = render_email(snapshot, "Last notice.", "disconnection", now=FIXED_NOW)

        assert "background-color:#b91c1c;color:#ffffff;padding:10px 24px" in rendered.html
        assert "Important account notice" in rendered.html
        assert "Your account is scheduled for disconnection" in rendered.html

    def test_message_line_breaks(self, snapshot):
        rendered = render_email(snapshot, "Line one\nLine two", "reminder", now=FIXED_NOW)
        assert "Line one<br />Line two" in rendered.html

    def test_message_is_escaped(self, snapshot):
        rendered = render_email(snapshot, "<script>x</script>", "reminder", now=FIXED_NOW)
        assert "<script>" not in rendered.html
        assert "&lt;script&gt;" in rendered.html

    def test_footer_uses_render_year(self, snapshot):
        rendered = render_email(snapshot, "Hi", "reminder", now=FIXED_NOW)
        assert "&copy; 2025 AirFiber Internet Billing" in rendered.html

    def test_empty_snapshot_uses_placeholders(self):
        rendered = render_email(ClientSnapshot(), "Hello", "reminder", now=FIXED_NOW)

        assert detail_values(rendered.html) == ["-", "₱-", "-", "-"]
        assert "Hi Valued Customer," in rendered.html

    def test_missing_snapshot_never_fails(self):
        rendered = render_email(None, None, None, now=FIXED_NOW)
        assert detail_values(rendered.html) == ["-", "₱-", "-", "-"]


class TestReceiptLayout:
    def test_receipt_slip(self, snapshot):
        rendered = render_email(snapshot, "Thanks", "receipt", now=FIXED_NOW)

        assert 'width="360"' in rendered.html
        assert "DATE: 2/1/2025   TIME: 02:05:09 PM" in rendered.html
        assert "CUSTOMER: Ana" in rendered.html
        assert "SERVICE : ana-wifi" in rendered.html
        assert "PAYMENT METHOD: CASH/GCASH" in rendered.html
        assert "*** NO SIGNATURE REQUIRED ***" in rendered.html

    def test_amount_appears_as_line_item_and_total(self, snapshot):
        rendered = render_email(snapshot, "Thanks", "receipt", now=FIXED_NOW)

        assert "INTERNET SERVICE           ₱500" in rendered.html
        assert "TOTAL                      ₱500" in rendered.html

    def test_empty_receipt(self):
        rendered = render_email(ClientSnapshot(), "Thanks", "receipt", now=FIXED_NOW)

        assert "SERVICE : INTERNET SERVICE" in rendered.html
        assert "DUE DATE: -" in rendered.html
        assert "DEVICE MAC: -" in rendered.html
        assert "TOTAL                      ₱-" in rendered.html


class TestSubjectAndType:
    def test_default_subject(self, snapshot):
        assert render_email(snapshot, "x", "reminder").subject == "Billing Reminder"
        assert render_email(snapshot, "x", "reminder", subject="  ").subject == "Billing Reminder"

    def test_custom_subject(self, snapshot):
        assert render_email(snapshot, "x", "receipt", subject="Your receipt").subject == "Your receipt"

    def test_text_body_is_message(self, snapshot):
        assert render_email(snapshot, "Pay by Friday", "reminder").text == "Pay by Friday"

    @pytest.mark.parametrize("unknown", [None, "", "invoice", "RECEIPT", 5, ["receipt"]])
    def test_unknown_type_renders_reminder(self, snapshot, unknown):
        fallback = render_email(snapshot, "x", unknown, now=FIXED_NOW)
        reminder = render_email(snapshot, "x", "reminder", now=FIXED_NOW)
        assert fallback.html == reminder.html

    def test_every_type_has_a_style(self):
        assert set(NOTIFICATION_STYLES) == set(NotificationType)
        assert NOTIFICATION_STYLES[NotificationType.RECEIPT].layout == "receipt"


class TestDeterminism:
    @pytest.mark.parametrize("kind", ["reminder", "receipt", "disconnection"])
    def test_same_input_same_output(self, snapshot, kind):
        first = render_email(snapshot, "Hello\nthere", kind, now=FIXED_NOW)
        second = render_email(snapshot, "Hello\nthere", kind, now=FIXED_NOW)
        assert first == second


class TestClientSnapshot:
    def test_accepts_wire_names_and_numbers(self):
        snap = ClientSnapshot.model_validate({"dueDate": "2025-02-01", "amount": 500, "id": 3})
        assert snap.due_date == "2025-02-01"
        assert snap.amount == "500"

    def test_unusable_values_are_dropped(self):
        snap = ClientSnapshot.model_validate({"name": "Ana", "wifi": ["x"], "amount": {"v": 1}, "phone": True})
        assert snap.name == "Ana"
        assert snap.wifi is None
        assert snap.amount is None
        assert snap.phone is None

    def test_nl2br_escapes_each_line(self):
        assert str(nl2br("a & b\r\nc")) == "a &amp; b<br />c"
