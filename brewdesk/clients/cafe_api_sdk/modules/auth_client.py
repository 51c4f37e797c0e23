from __future__ import annotations

from typing import Any, BinaryIO

from brewdesk.clients.cafe_api_sdk.models import LoginResponse, UserProfile, VerifyOtpResponse
from brewdesk.clients.cafe_api_sdk.modules.base import BaseClient, parse_model


class AuthClient(BaseClient):
    def login(self, phone_number: str) -> LoginResponse:
        data = self._object("POST", "/api/login/", json_body={"phone_number": phone_number})
        return parse_model(LoginResponse, data)

    def verify_otp(self, phone_number: str, otp: str) -> VerifyOtpResponse:
        data = self._object("POST", "/api/verify-otp/", json_body={"phone_number": phone_number, "otp": otp})
        return parse_model(VerifyOtpResponse, data)

    def register(
        self,
        full_name: str,
        phone_number: str,
        email: str | None = None,
        profile_picture: tuple[str, BinaryIO | bytes, str] | None = None,
    ) -> UserProfile:
        form: dict[str, Any] = {"full_name": full_name, "phone_number": phone_number}
        if email:
            form["email"] = email
        files = {"profile_picture": profile_picture} if profile_picture else None
        data = self._object("POST", "/api/register/", data=form, files=files)
        return parse_model(UserProfile, data)

    def profile(self) -> UserProfile:
        data = self._object("GET", "/api/auth/profile/")
        return parse_model(UserProfile, data)
