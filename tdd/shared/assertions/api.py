"""
Custom assertion helpers for API testing.

These helpers provide cleaner, more expressive assertions for common
patterns in API tests.
"""
from typing import Any

from httpx import Response


def assert_status_code(response: Response, expected: int) -> None:
    """Assert response has expected status code with helpful error message."""
    assert response.status_code == expected, (
        f"Expected status {expected}, got {response.status_code}. "
        f"Response body: {response.text}"
    )


def assert_json_list_length(response: Response, expected_length: int) -> None:
    """Assert response JSON is a list of expected length."""
    actual = response.json()
    assert isinstance(actual, list), f"Expected list, got {type(actual)}"
    assert len(actual) == expected_length, (
        f"Expected {expected_length} items, got {len(actual)}"
    )


def assert_error_response(response: Response, status_code: int, detail: str) -> None:
    """Assert response is an error with expected status and detail message."""
    assert_status_code(response, status_code)
    actual = response.json()
    assert "detail" in actual, f"Expected 'detail' in error response: {actual}"
    assert actual["detail"] == detail, (
        f"Expected detail '{detail}', got '{actual['detail']}'"
    )


def assert_unauthorized(response: Response) -> None:
    """Assert response is a 401 rejection."""
    assert_error_response(response, 401, "Unauthorized")


def assert_not_found(response: Response) -> None:
    """Assert response is a 404 for a missing repository."""
    assert_error_response(response, 404, "Repository not found")


def assert_internal_error(response: Response) -> str:
    """Assert response is a 500 and return its detail message."""
    assert_status_code(response, 500)
    actual = response.json()
    assert "detail" in actual, f"Expected 'detail' in error response: {actual}"
    return actual["detail"]


def assert_validation_error(response: Response) -> dict[str, Any]:
    """Assert response is a validation error (422).

    Returns the error detail for further inspection.
    """
    assert_status_code(response, 422)
    return response.json()


# -----------------------------------------------------------------------------
# Repository Assertions
# -----------------------------------------------------------------------------

def assert_repository_response(response: Response, name: str) -> dict[str, Any]:
    """Assert response is a 200 repository snapshot for the given name.

    Returns the full response JSON for further assertions.
    """
    assert_status_code(response, 200)
    actual = response.json()
    for key in ("Name", "Branches", "Remotes", "Tags"):
        assert key in actual, f"Expected key '{key}' in repository response: {actual}"
    assert actual["Name"] == name
    return actual
