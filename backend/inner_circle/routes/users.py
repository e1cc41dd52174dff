from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from .. import schemas
from ..db import serialize_document
from ..dependencies import Users

router = APIRouter(tags=["users"])
admin_router = APIRouter(prefix="/admin/users", tags=["admin"])


@router.post("/users", response_model=schemas.RegistrationResponse)
def register_user(payload: schemas.UserCreate, users: Users):
    result = users.register(payload.model_dump(exclude_none=True))
    user = serialize_document(result.user)
    body = schemas.RegistrationResponse(
        created=result.created,
        message=result.message,
        insertedId=user["_id"] if result.created else None,
        user=user,
    )
    # A repeat registration is answered like a success, just without an insert.
    status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@router.get("/users/{email}", response_model=schemas.UserRecord)
def get_user(email: str, users: Users):
    return serialize_document(users.get_by_email(email))


@router.get("/users/{email}/role", response_model=schemas.RoleResponse)
def get_user_role(email: str, users: Users):
    return {"role": users.get_role(email)}


@router.patch("/users/{email}/profile", response_model=schemas.UserRecord)
def update_user_profile(email: str, payload: schemas.ProfileUpdate, users: Users):
    updated = users.update_profile(email, payload.model_dump(exclude_unset=True))
    return serialize_document(updated)


@admin_router.get("", response_model=list[schemas.UserWithLessonCount])
def list_users(users: Users):
    return [serialize_document(user) for user in users.list_all_with_lesson_counts()]


@admin_router.patch("/{user_id}/role", response_model=schemas.UserRecord)
def set_user_role(user_id: str, payload: schemas.RoleUpdate, users: Users):
    return serialize_document(users.set_role(user_id, payload.role))
