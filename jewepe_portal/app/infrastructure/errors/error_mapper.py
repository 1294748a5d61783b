from jewepe_portal.clients.jewepe_sdk.errors import GENERIC_MESSAGE, ApiError, NetworkError, ServerError


class ErrorMapper:
    @classmethod
    def to_display_message(cls, error: Exception, fallback: str = GENERIC_MESSAGE) -> str:
        """Text shown to the user for ``error``.

        Server messages are shown verbatim; otherwise the screen's own
        fallback is used. Network failures keep their transport message.
        """
        if isinstance(error, ServerError):
            return error.server_message or fallback
        if isinstance(error, NetworkError):
            return error.human_message
        if isinstance(error, ApiError):
            return error.human_message or fallback
        return fallback

    @classmethod
    def to_payload(cls, error: Exception, fallback: str = GENERIC_MESSAGE) -> dict:
        if isinstance(error, ApiError):
            return {
                "code": error.code,
                "message": cls.to_display_message(error, fallback),
                "status_code": error.status_code,
                "trace_id": error.trace_id,
                "details": error.details,
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": fallback,
            "status_code": None,
            "trace_id": None,
            "details": str(error),
        }
