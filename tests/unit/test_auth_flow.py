from __future__ import annotations

import json

import httpx
import pytest

from brewdesk.app.application.use_cases.auth_flow import AuthFlowController, AuthStep, validate_phone
from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind
from brewdesk.clients.cafe_api_sdk.modules.auth_client import AuthClient
from brewdesk.clients.cafe_api_sdk.session_store import MemorySessionStore
from tests.support import Recorder, build_http


class FakeAuthApi:
    def __init__(self, verify_payload: dict | None = None, login_status: int = 200) -> None:
        self.requests: list[httpx.Request] = []
        self.verify_payload = verify_payload if verify_payload is not None else {"token": "tok-1", "user": {"id": 1}}
        self.login_status = login_status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/login/":
            if self.login_status != 200:
                return httpx.Response(self.login_status, json={"detail": "User not found."})
            return httpx.Response(200, json={"detail": "OTP sent.", "otp_required": True})
        if request.url.path == "/api/verify-otp/":
            return httpx.Response(200, json=self.verify_payload)
        if request.url.path == "/api/register/":
            return httpx.Response(201, json={"id": 5, "full_name": "Asha Rai"})
        return httpx.Response(404)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


def _controller(api: FakeAuthApi, store: MemorySessionStore, navigator: Recorder, notifier: Recorder | None = None):
    return AuthFlowController(AuthClient(build_http(api, store)), store, navigator, notifier)


@pytest.mark.parametrize("phone", ["9812345678", "+9779812345678", "981 234 5678", "9612345678"])
def test_valid_phone_numbers(phone: str) -> None:
    assert validate_phone(phone).endswith("12345678")


@pytest.mark.parametrize("phone", ["123", "9512345678", "98123456789", "", "98123x5678"])
def test_invalid_phone_numbers(phone: str) -> None:
    with pytest.raises(ApiError) as excinfo:
        validate_phone(phone)

    assert excinfo.value.kind is ErrorKind.VALIDATION


def test_invalid_phone_makes_no_request(navigator: Recorder) -> None:
    api = FakeAuthApi()
    notifier = Recorder()
    controller = _controller(api, MemorySessionStore(), navigator, notifier)

    result = controller.submit_phone("123")

    assert result.ok is False
    assert result.error is not None and result.error.kind is ErrorKind.VALIDATION
    assert controller.step is AuthStep.PHONE
    assert api.requests == []
    assert notifier.last == ("error", "Please enter a valid phone number.")


def test_valid_phone_moves_to_otp_step(navigator: Recorder) -> None:
    api = FakeAuthApi()
    controller = _controller(api, MemorySessionStore(), navigator)

    result = controller.submit_phone("98 1234 5678")

    assert result.ok is True
    assert controller.step is AuthStep.OTP
    assert controller.phone_number == "9812345678"
    assert json.loads(api.requests[0].content) == {"phone_number": "9812345678"}


def test_login_failure_stays_on_phone_step_with_server_message(navigator: Recorder) -> None:
    controller = _controller(FakeAuthApi(login_status=404), MemorySessionStore(), navigator)

    result = controller.submit_phone("9812345678")

    assert result.ok is False
    assert result.message == "User not found."
    assert controller.step is AuthStep.PHONE


def test_five_digit_otp_fails_locally(navigator: Recorder) -> None:
    api = FakeAuthApi()
    controller = _controller(api, MemorySessionStore(), navigator)
    controller.submit_phone("9812345678")

    result = controller.submit_otp("12345")

    assert result.ok is False
    assert result.error is not None and result.error.code == "INVALID_OTP"
    assert api.paths() == ["/api/login/"]
    assert controller.step is AuthStep.OTP


def test_six_digit_otp_triggers_exactly_one_verify(navigator: Recorder) -> None:
    api = FakeAuthApi()
    store = MemorySessionStore()
    controller = _controller(api, store, navigator)
    controller.submit_phone("9812345678")

    result = controller.submit_otp("123456")

    assert result.ok is True
    assert api.paths().count("/api/verify-otp/") == 1
    assert json.loads(api.requests[-1].content) == {"phone_number": "9812345678", "otp": "123456"}
    assert store.get_token() == "tok-1"
    assert navigator.calls == [("/admin",)]


def test_access_field_is_used_when_token_is_absent(navigator: Recorder) -> None:
    store = MemorySessionStore()
    controller = _controller(FakeAuthApi(verify_payload={"access": "jwt-access"}), store, navigator)
    controller.submit_phone("9812345678")

    controller.submit_otp("123456")

    assert store.get_token() == "jwt-access"


def test_missing_token_is_a_protocol_error(navigator: Recorder) -> None:
    store = MemorySessionStore()
    controller = _controller(FakeAuthApi(verify_payload={"user": {"id": 1}}), store, navigator)
    controller.submit_phone("9812345678")

    result = controller.submit_otp("123456")

    assert result.ok is False
    assert result.error is not None and result.error.kind is ErrorKind.PROTOCOL_ERROR
    assert store.get_token() is None
    assert controller.step is AuthStep.OTP
    assert controller.phone_number == "9812345678"
    assert navigator.calls == []


def test_successful_login_consumes_redirect_target(navigator: Recorder) -> None:
    store = MemorySessionStore(redirect_target="/admin/orders")
    controller = _controller(FakeAuthApi(), store, navigator)
    controller.submit_phone("9812345678")

    controller.submit_otp("123456")

    assert navigator.calls == [("/admin/orders",)]
    assert store.get_redirect_target() is None


def test_otp_before_phone_is_rejected(navigator: Recorder) -> None:
    api = FakeAuthApi()
    controller = _controller(api, MemorySessionStore(), navigator)

    result = controller.submit_otp("123456")

    assert result.ok is False
    assert api.requests == []


def test_go_back_discards_otp(navigator: Recorder) -> None:
    controller = _controller(FakeAuthApi(), MemorySessionStore(), navigator)
    controller.submit_phone("9812345678")
    controller.submit_otp("12")

    controller.go_back_to_phone()

    assert controller.step is AuthStep.PHONE
    assert controller.otp == ""


def test_logout_from_any_state(navigator: Recorder) -> None:
    store = MemorySessionStore(token="tok")
    controller = _controller(FakeAuthApi(), store, navigator)
    controller.submit_phone("9812345678")

    controller.logout()

    assert store.get_token() is None
    assert controller.step is AuthStep.PHONE
    assert navigator.last == ("/login",)


def test_register_validates_before_calling_api(navigator: Recorder) -> None:
    api = FakeAuthApi()
    controller = _controller(api, MemorySessionStore(), navigator)

    missing_name = controller.register("  ", "9812345678", "asha@example.test")
    bad_email = controller.register("Asha Rai", "9812345678", "asha.example.test")
    bad_phone = controller.register("Asha Rai", "12345", "asha@example.test")

    assert [result.error.code for result in (missing_name, bad_email, bad_phone) if result.error] == [
        "NAME_REQUIRED",
        "INVALID_EMAIL",
        "INVALID_PHONE",
    ]
    assert api.requests == []


def test_register_success_navigates_to_login(navigator: Recorder) -> None:
    api = FakeAuthApi()
    controller = _controller(api, MemorySessionStore(), navigator)

    result = controller.register("Asha Rai", "9812345678", "asha@example.test")

    assert result.ok is True
    assert result.value is not None and result.value.full_name == "Asha Rai"
    assert api.paths() == ["/api/register/"]
    assert navigator.calls == [("/login",)]
