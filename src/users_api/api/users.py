"""User record endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from users_api.domain.models import UserDocument  # noqa: TC001
from users_api.services.users import UserStoreError

if TYPE_CHECKING:
    from users_api.containers import AppContainer

router = APIRouter(prefix="/users", tags=["users"])

_logger = logging.getLogger(__name__)

# BSON stores integers in at most 64 bits.
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class CreateUserRequest(BaseModel):
    """Request body for creating a user."""

    model_config = ConfigDict(strict=True)

    name: str = Field(min_length=1)
    email: EmailStr
    age: int = Field(ge=_INT64_MIN, le=_INT64_MAX)


@router.get("")
def list_users(request: Request) -> list[UserDocument]:
    """Return every stored user."""
    container: AppContainer = request.app.state.container
    try:
        return container.user_service.list_users()
    except UserStoreError:
        _logger.exception("Failed to list users")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener usuarios",
        ) from None


@router.post("")
def create_user(body: CreateUserRequest, request: Request) -> dict[str, str]:
    """Create a user and return its generated id."""
    container: AppContainer = request.app.state.container
    try:
        user_id = container.user_service.create_user(
            name=body.name, email=body.email, age=body.age
        )
    except UserStoreError:
        _logger.exception("Failed to insert user")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al insertar usuario",
        ) from None
    return {"message": "Usuario creado", "id": user_id}


@router.delete("/{user_id}")
def delete_user(user_id: str, request: Request) -> dict[str, str]:
    """Delete a user by its id."""
    object_id = _parse_object_id(user_id)
    if object_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="ID inválido"
        )
    container: AppContainer = request.app.state.container
    try:
        deleted = container.user_service.delete_user(object_id)
    except UserStoreError:
        _logger.exception("Failed to delete user", extra={"user_id": user_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al eliminar usuario",
        ) from None
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Usuario no encontrado"
        )
    return {"message": "Usuario eliminado"}


def _parse_object_id(raw: str) -> ObjectId | None:
    try:
        return ObjectId(raw)
    except InvalidId:
        return None
