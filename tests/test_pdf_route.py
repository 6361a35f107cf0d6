from playwright.async_api import Error as PlaywrightError

from conftest import PDF_BYTES
from inspection_portal.core.config import reset_settings
from inspection_portal.domain import LaunchFailed, RenderedDocument

DETACHED = "Navigating frame was detached"


def test_work_order_pdf_is_returned_as_attachment(client, install_provider):
    provider = install_provider(["ok"])

    response = client.get("/api/pdf/42")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="WorkOrder-42.pdf"'
    assert response.content == PDF_BYTES

    page = provider.browser.contexts[0].page
    assert page.goto_calls[0][0] == (
        "http://testserver/es/dashboard/documents/work-orders/generate-pdf/42?preview=true"
    )
    assert provider.browser.close_count == 1


def test_liftgate_type_renders_inspection_report_with_session_cookie(client, install_provider):
    provider = install_provider(["ok"])

    response = client.get(
        "/api/pdf/42",
        params={"type": "liftgate"},
        headers={"cookie": "session=abc", "authorization": "Bearer t0k"},
    )

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="Inspection-42.pdf"'
    assert response.content
    context = provider.browser.contexts[0]
    assert context.page.goto_calls[0][0].startswith(
        "http://testserver/es/dashboard/documents/inspections/generate-pdf/42"
    )
    assert context.options["extra_http_headers"]["cookie"] == "session=abc"
    assert context.options["extra_http_headers"]["Authorization"] == "Bearer t0k"


def test_unknown_type_falls_back_to_work_order(client, install_provider):
    install_provider(["ok"])

    response = client.get("/api/pdf/7", params={"type": "brakes"})

    assert response.status_code == 200
    assert 'filename="WorkOrder-7.pdf"' in response.headers["content-disposition"]


def test_report_base_url_overrides_request_origin(client, install_provider, monkeypatch):
    monkeypatch.setenv("REPORT_BASE_URL", "https://portal.example.com/")
    reset_settings()
    provider = install_provider(["ok"])

    response = client.get("/api/pdf/42")

    assert response.status_code == 200
    assert provider.browser.contexts[0].page.goto_calls[0][0].startswith(
        "https://portal.example.com/es/dashboard/"
    )


def test_non_success_page_fails_after_a_single_attempt(client, install_provider):
    provider = install_provider([500, "ok", "ok"])

    response = client.get("/api/pdf/42")

    assert response.status_code == 500
    assert response.text.startswith("PDF_ERROR: ")
    assert "status=500" in response.text
    assert len(provider.browser.contexts) == 1
    assert provider.browser.close_count == 1


def test_login_redirect_is_reported_with_final_url(client, install_provider):
    install_provider([(403, "http://testserver/es/login")])

    response = client.get("/api/pdf/42")

    assert response.status_code == 500
    assert "finalUrl=http://testserver/es/login" in response.text


def test_detached_frame_is_retried_with_a_fresh_context(client, install_provider):
    provider = install_provider([PlaywrightError(DETACHED), "ok"])

    response = client.get("/api/pdf/42")

    assert response.status_code == 200
    contexts = provider.browser.contexts
    assert len(contexts) == 2
    assert contexts[0] is not contexts[1]
    assert all(context.closed for context in contexts)
    assert provider.browser.close_count == 1


def test_three_detached_frames_exhaust_the_retry_budget(client, install_provider):
    provider = install_provider(
        [PlaywrightError(DETACHED), PlaywrightError(DETACHED), PlaywrightError(DETACHED), "ok"]
    )

    response = client.get("/api/pdf/42")

    assert response.status_code == 500
    assert response.text.startswith("PDF_ERROR: ")
    assert "attempt=3" in response.text
    assert len(provider.browser.contexts) == 3
    assert all(context.closed for context in provider.browser.contexts)
    assert provider.browser.close_count == 1


def test_launch_failure_is_fatal(client, install_provider):
    provider = install_provider(launch_error=LaunchFailed("chromium missing"))

    response = client.get("/api/pdf/42")

    assert response.status_code == 500
    assert response.text == "PDF_FATAL: chromium missing"
    assert provider.browsers == []


def test_unexpected_error_still_closes_the_browser(client, install_provider):
    provider = install_provider(context_error=RuntimeError("out of memory"))

    response = client.get("/api/pdf/42")

    assert response.status_code == 500
    assert response.text == "PDF_FATAL: out of memory"
    assert provider.browser.close_count == 1


def test_each_request_gets_its_own_browser(client, install_provider):
    provider = install_provider(["ok"])

    assert client.get("/api/pdf/1").status_code == 200
    assert client.get("/api/pdf/2").status_code == 200

    assert len(provider.browsers) == 2
    assert [browser.close_count for browser in provider.browsers] == [1, 1]


def test_non_ascii_id_gets_an_encoded_filename(client, install_provider):
    provider = install_provider(["ok"])

    response = client.get("/api/pdf/%E4%B8%AD")

    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        "attachment; filename=\"WorkOrder-_.pdf\"; filename*=UTF-8''WorkOrder-%E4%B8%AD.pdf"
    )
    assert response.content == PDF_BYTES
    assert "/generate-pdf/%E4%B8%AD?preview=true" in provider.browser.contexts[0].page.goto_calls[0][0]
    assert provider.browser.close_count == 1


def test_response_building_errors_are_fatal(client, install_provider, monkeypatch):
    install_provider(["ok"])
    monkeypatch.setattr(
        RenderedDocument, "content_disposition", property(lambda self: 'attachment; filename="中"')
    )

    response = client.get("/api/pdf/42")

    assert response.status_code == 500
    assert response.text.startswith("PDF_FATAL: ")
