from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from pokernight.domain import DomainValidationError, GameStateError, UnknownPlayerError
from pokernight.service import GameNotFoundError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def domain_error(exc: DomainValidationError, **details: Any) -> HTTPException:
    if isinstance(exc, GameNotFoundError):
        return api_error(
            code="game_not_found",
            message=str(exc),
            details=details or None,
            status_code=status.HTTP_404_NOT_FOUND,
        )
    if isinstance(exc, GameStateError):
        return api_error(
            code="game_not_active",
            message=str(exc),
            details=details or None,
            status_code=status.HTTP_409_CONFLICT,
        )
    if isinstance(exc, UnknownPlayerError):
        return api_error(code="invalid_player", message=str(exc), details=details or None)
    return api_error(code="invalid_input", message=str(exc), details=details or None)
