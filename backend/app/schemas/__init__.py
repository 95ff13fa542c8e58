from app.schemas.storage import ErrorResponse, PresignResponse

__all__ = [
    "PresignResponse",
    "ErrorResponse",
]
