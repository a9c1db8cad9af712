# Custom assertion helpers

from .api import (
    assert_error_response,
    assert_internal_error,
    assert_json_list_length,
    assert_not_found,
    assert_repository_response,
    assert_status_code,
    assert_unauthorized,
    assert_validation_error,
)

__all__ = [
    "assert_status_code",
    "assert_json_list_length",
    "assert_error_response",
    "assert_unauthorized",
    "assert_not_found",
    "assert_internal_error",
    "assert_validation_error",
    "assert_repository_response",
]
