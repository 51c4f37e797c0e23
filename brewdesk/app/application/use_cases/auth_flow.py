from __future__ import annotations

import re
from enum import Enum
from typing import BinaryIO

from brewdesk.app.domain.models.operation_result import OperationResult
from brewdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from brewdesk.app.infrastructure.logging.logger import get_logger, log_action
from brewdesk.app.ports import Navigator, Notifier, notify_quietly
from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind
from brewdesk.clients.cafe_api_sdk.models import LoginResponse, UserProfile, VerifyOtpResponse
from brewdesk.clients.cafe_api_sdk.modules.auth_client import AuthClient
from brewdesk.clients.cafe_api_sdk.session_store import SessionStore

logger = get_logger(__name__)

# optional +977 country code, then ten digits starting 96 to 99
PHONE_PATTERN = re.compile(r"^(\+977)?9[6-9][0-9]{8}$")
OTP_PATTERN = re.compile(r"^[0-9]{6}$")
_WHITESPACE = re.compile(r"\s+")


class AuthStep(str, Enum):
    PHONE = "phone"
    OTP = "otp"


def normalize_phone(phone_number: str) -> str:
    return _WHITESPACE.sub("", phone_number or "")


def validate_phone(phone_number: str) -> str:
    normalized = normalize_phone(phone_number)
    if not PHONE_PATTERN.fullmatch(normalized):
        raise ApiError.validation("Please enter a valid phone number.", code="INVALID_PHONE")
    return normalized


def validate_otp(code: str) -> str:
    normalized = (code or "").strip()
    if not OTP_PATTERN.fullmatch(normalized):
        raise ApiError.validation("Please enter a valid 6-digit OTP.", code="INVALID_OTP")
    return normalized


class AuthFlowController:
    """Two-step phone then OTP sign-in.

    A fresh controller is built per visit to the login screen. The phone number
    survives a failed OTP attempt; only :meth:`go_back_to_phone` returns to the
    first step.
    """

    def __init__(
        self,
        auth_client: AuthClient,
        session_store: SessionStore,
        navigator: Navigator,
        notifier: Notifier | None = None,
        *,
        login_path: str = "/login",
        dashboard_path: str = "/admin",
    ) -> None:
        self.auth_client = auth_client
        self.session_store = session_store
        self.navigator = navigator
        self.notifier = notifier or notify_quietly
        self.login_path = login_path
        self.dashboard_path = dashboard_path
        self.step = AuthStep.PHONE
        self.phone_number: str | None = None
        self.otp: str = ""

    def submit_phone(self, phone_number: str) -> OperationResult[LoginResponse]:
        try:
            normalized = validate_phone(phone_number)
            response = self.auth_client.login(normalized)
        except ApiError as error:
            return self._fail("submit_phone", error)

        self.phone_number = normalized
        self.otp = ""
        self.step = AuthStep.OTP
        log_action(logger, "auth", "submit_phone", "success")
        self.notifier("success", response.detail or "OTP sent to your phone.")
        return OperationResult.success(response)

    def submit_otp(self, code: str) -> OperationResult[VerifyOtpResponse]:
        if self.step is not AuthStep.OTP or not self.phone_number:
            return self._fail("submit_otp", ApiError.validation("Request an OTP first.", code="OTP_NOT_REQUESTED"))
        self.otp = code
        try:
            normalized = validate_otp(code)
            response = self.auth_client.verify_otp(self.phone_number, normalized)
        except ApiError as error:
            return self._fail("submit_otp", error)

        token = response.resolved_token()
        if not token:
            error = ApiError(
                kind=ErrorKind.PROTOCOL_ERROR,
                message="Login succeeded but no token was returned.",
                code="TOKEN_MISSING",
            )
            return self._fail("submit_otp", error)

        self.session_store.set_token(token)
        self.otp = ""
        log_action(logger, "auth", "submit_otp", "success")
        self.notifier("success", "Signed in.")
        self.navigator(self._post_login_target())
        return OperationResult.success(response)

    def go_back_to_phone(self) -> None:
        self.step = AuthStep.PHONE
        self.otp = ""

    def logout(self) -> None:
        self.session_store.clear_token()
        self.step = AuthStep.PHONE
        self.phone_number = None
        self.otp = ""
        log_action(logger, "auth", "logout", "success")
        self.navigator(self.login_path)

    def register(
        self,
        full_name: str,
        phone_number: str,
        email: str,
        profile_picture: tuple[str, BinaryIO | bytes, str] | None = None,
    ) -> OperationResult[UserProfile]:
        try:
            name = (full_name or "").strip()
            if not name:
                raise ApiError.validation("Full name is required.", code="NAME_REQUIRED")
            normalized_phone = validate_phone(phone_number)
            normalized_email = (email or "").strip()
            if "@" not in normalized_email:
                raise ApiError.validation("Please enter a valid email address.", code="INVALID_EMAIL")
            user = self.auth_client.register(
                name,
                normalized_phone,
                email=normalized_email,
                profile_picture=profile_picture,
            )
        except ApiError as error:
            return self._fail("register", error)

        log_action(logger, "auth", "register", "success")
        self.notifier("success", "Registration successful. Please sign in.")
        self.navigator(self.login_path)
        return OperationResult.success(user)

    def _post_login_target(self) -> str:
        target = self.session_store.get_redirect_target()
        self.session_store.clear_redirect_target()
        if not target or target == self.login_path:
            return self.dashboard_path
        return target

    def _fail(self, action: str, error: ApiError) -> OperationResult:
        log_action(logger, "auth", action, "failure", kind=error.kind.value, code=error.code)
        self.notifier("error", ErrorMapper.to_display_message(error))
        return OperationResult.failure(error)
