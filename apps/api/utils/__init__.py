# Utils Package

from .structured_logger import (
    configure_logging,
    StructuredFormatter,
    ColoredFormatter,
    RequestContextFilter,
    get_request_id,
    set_request_id,
    reset_request_id,
    new_request_id,
)

__all__ = [
    "configure_logging",
    "StructuredFormatter",
    "ColoredFormatter",
    "RequestContextFilter",
    "get_request_id",
    "set_request_id",
    "reset_request_id",
    "new_request_id",
]
