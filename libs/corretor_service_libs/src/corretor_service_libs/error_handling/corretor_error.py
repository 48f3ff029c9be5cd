"""Core exception class carrying a structured ErrorDetail."""

from __future__ import annotations

from corretor_core.models.error_models import ErrorDetail


class CorretorError(Exception):
    """Exception raised by services for every expected failure mode.

    The wrapped ErrorDetail is immutable; it is the single source of truth for
    the error code, message and context that end up in logs and responses.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    def __str__(self) -> str:
        return f"[{self.error_detail.error_code.value}] {self.error_detail.message}"

    def __repr__(self) -> str:
        return (
            f"CorretorError(error_code={self.error_code!r}, service={self.service!r}, "
            f"operation={self.operation!r}, correlation_id={self.correlation_id!r})"
        )
