"""
Email client tests. SendGrid is replaced by httpx.MockTransport.
"""

import json

import httpx

from marketplace.services.email_service import (
    SENDGRID_SEND_URL,
    EmailService,
    generate_password_reset_html,
    send_password_reset_email,
)


LINK = "http://testserver/reset-password?token=abc123"


def make_service(handler, **kwargs):
    options = {"api_key": "SG.test", "from_email": "noreply@b2bmarket.com"}
    options.update(kwargs)
    return EmailService(transport=httpx.MockTransport(handler), **options)


class TestSendEmail:

    def test_accepted(self, app):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(202)

        assert make_service(handler).send_password_reset_email("a@example.com", LINK) is True

        [request] = seen
        assert str(request.url) == SENDGRID_SEND_URL
        assert request.headers["Authorization"] == "Bearer SG.test"
        body = json.loads(request.content)
        assert body["personalizations"][0]["to"][0]["email"] == "a@example.com"
        assert body["from"]["email"] == "noreply@b2bmarket.com"
        assert any(LINK in part["value"] for part in body["content"])

    def test_provider_error(self, app):
        service = make_service(lambda request: httpx.Response(401, text="bad key"))
        assert service.send_password_reset_email("a@example.com", LINK) is False

    def test_network_error(self, app):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        assert make_service(handler).send_password_reset_email("a@example.com", LINK) is False

    def test_timeout(self, app):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        assert make_service(handler).send_password_reset_email("a@example.com", LINK) is False

    def test_missing_api_key(self, app):
        def handler(request):
            raise AssertionError("should not be called")

        assert make_service(handler, api_key="").send_password_reset_email("a@example.com", LINK) is False

    def test_test_mode_never_calls_provider(self, app):
        def handler(request):
            raise AssertionError("should not be called")

        assert make_service(handler, test_mode=True).send_password_reset_email("a@example.com", LINK) is True


def test_module_sender_uses_app_config(app):
    # Test config has no API key, so nothing leaves the process
    assert send_password_reset_email("a@example.com", LINK) is False


def test_html_escapes_link():
    html = generate_password_reset_html('http://x/?a=1&b="2"')
    assert "&amp;" in html
    assert '"2"' not in html
