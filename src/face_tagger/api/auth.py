"""Operator token authentication for API routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from face_tagger.containers import AppContainer


def _get_operator_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.operator_token


async def require_operator(
    x_operator_token: str | None = Header(default=None),
    operator_token: str = Depends(_get_operator_token),
) -> None:
    """Ensure requests include a valid operator token."""
    if not x_operator_token or x_operator_token != operator_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
