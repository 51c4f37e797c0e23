from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind


class ErrorMapper:
    _KIND_MESSAGES = {
        ErrorKind.VALIDATION: ("Check the highlighted fields and try again.", "Fix the input before resubmitting."),
        ErrorKind.UNAUTHORIZED: ("Your session has expired.", "Sign in again to continue."),
        ErrorKind.REQUEST_FAILED: ("The server rejected the request.", "Retry, or contact support if it persists."),
        ErrorKind.NETWORK_ERROR: ("Network error. Please try again.", "Check your connection and press Retry."),
        ErrorKind.PROTOCOL_ERROR: ("The server sent an unexpected response.", "Retry; report it if it happens again."),
        ErrorKind.MAPPING_ERROR: ("Some labels could not be resolved.", "Refresh the catalog."),
    }

    _STATUS_HINTS = {
        403: ("PERMISSION_DENIED", "You do not have permission for this action."),
        404: ("NOT_FOUND", "The requested record no longer exists."),
        500: ("INTERNAL_ERROR", "The server hit an internal error."),
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, ApiError):
            fallback, suggestion = cls._KIND_MESSAGES.get(error.kind, (error.message, ""))
            code = error.code
            # the server's own wording wins whenever it sent one
            message = error.message or fallback
            status_code = error.status_code or -1
            mapped = cls._STATUS_HINTS.get(status_code)
            if mapped is None and status_code >= 500:
                mapped = cls._STATUS_HINTS[500]
            if mapped is not None:
                code = mapped[0]
                if not error.message or error.message == error.code:
                    message = mapped[1]
            return {
                "code": code,
                "kind": error.kind.value,
                "message": message,
                "details": error.details,
                "suggestion": suggestion,
            }
        return {
            "code": "INTERNAL_ERROR",
            "kind": None,
            "message": str(error) or type(error).__name__,
            "details": None,
            "suggestion": "Retry and report the incident if it persists.",
        }

    @classmethod
    def to_display_message(cls, error: Exception) -> str:
        return cls.to_payload(error)["message"]
