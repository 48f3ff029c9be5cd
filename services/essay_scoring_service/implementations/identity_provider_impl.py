"""Configured identity provider.

There is no authentication layer; every request acts as one configured user.
"""

from __future__ import annotations

from corretor_service_libs.logging_utils import create_service_logger

from services.essay_scoring_service.protocols import IdentityProviderProtocol

logger = create_service_logger("essay_scoring.identity")


class ConfiguredIdentityProvider(IdentityProviderProtocol):
    """Resolve the acting user from configuration.

    With ``trust_requested_id`` disabled the caller-supplied id is ignored and
    the default user is returned. When enabled, a positive integer id from the
    request is used and anything else falls back to the default.
    """

    def __init__(self, default_user_id: int, trust_requested_id: bool = False) -> None:
        self.default_user_id = default_user_id
        self.trust_requested_id = trust_requested_id

    def resolve_user_id(self, requested_user_id: str | None = None) -> int:
        if requested_user_id is None:
            return self.default_user_id

        if self.trust_requested_id:
            candidate = requested_user_id.strip()
            if candidate.isdigit() and int(candidate) > 0:
                return int(candidate)
            logger.warning(
                "Ignoring malformed user id from request",
                extra={"requested_user_id": requested_user_id},
            )
            return self.default_user_id

        if requested_user_id != str(self.default_user_id):
            logger.debug(
                "Requested user id replaced by configured user",
                extra={
                    "requested_user_id": requested_user_id,
                    "resolved_user_id": self.default_user_id,
                },
            )
        return self.default_user_id
