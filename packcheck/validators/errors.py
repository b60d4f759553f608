# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Validation failure type.

Every mismatch between what the pipeline produced and what the platform
conventions require raises ArtifactAssertionError. It subclasses
AssertionError so pytest renders it as a failed check, and it keeps the
expected and actual values so the log line and the message both show the
diff.
"""

from typing import Any


class ArtifactAssertionError(AssertionError):
    """A named check failed. `expected` and `actual` are kept verbatim."""

    def __init__(self, check: str, expected: Any, actual: Any, detail: str = "") -> None:
        self.check = check
        self.expected = expected
        self.actual = actual
        self.detail = detail
        message = f"{check}: expected {expected!r}, got {actual!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


def assert_equal(check: str, expected: Any, actual: Any, detail: str = "") -> None:
    """Raise ArtifactAssertionError unless expected == actual."""
    if expected != actual:
        raise ArtifactAssertionError(check, expected, actual, detail)
