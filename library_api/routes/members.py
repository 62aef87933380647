"""
Library API: Member Route Handlers
===================================

Endpoints:
    GET    /members               list all members
    POST   /member                create (id generated here)
    PATCH  /member/{member_id}    existence check, then full update
    DELETE /member/{member_id}    delete; 400 while the member holds books
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends

from library_api.exceptions import (
    BadRequestError,
    ForeignKeyViolationError,
    NotFoundError,
    ServerError,
    StoreError,
)
from library_api.routes.deps import get_member_store, json_body, request_body
from library_api.schemas import ErrorResponse, Member, MessageResponse
from library_api.stores import MemberStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Members"])


@router.get(
    "/members",
    response_model=List[Member],
    responses={
        404: {"description": "No members", "model": MessageResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all members",
)
async def list_members(store: MemberStore = Depends(get_member_store)) -> List[Member]:
    try:
        members = await store.get()
    except StoreError as exc:
        raise ServerError() from exc

    if not members:
        logger.info("no members found")
        raise NotFoundError("no members found", key="message")

    return members


@router.post(
    "/member",
    status_code=201,
    openapi_extra=request_body(Member),
    response_model=MessageResponse,
    responses={400: {"description": "Invalid body or insert failed", "model": ErrorResponse}},
    summary="Create a member",
)
async def create_member(
    member: Member = Depends(json_body(Member, "member creation failed")),
    store: MemberStore = Depends(get_member_store),
) -> MessageResponse:
    member = member.model_copy(update={"id": str(uuid.uuid4())})
    try:
        await store.create(member)
    except StoreError as exc:
        raise BadRequestError("member creation failed") from exc

    return MessageResponse(message="member created")


@router.patch(
    "/member/{member_id}",
    response_model=MessageResponse,
    openapi_extra=request_body(Member),
    responses={
        400: {"description": "Invalid body or update failed", "model": ErrorResponse},
        404: {"description": "Member not found", "model": MessageResponse},
    },
    summary="Update a member",
)
async def update_member(
    member_id: str,
    member: Member = Depends(json_body(Member, "member update failed")),
    store: MemberStore = Depends(get_member_store),
) -> MessageResponse:
    try:
        await store.exists(member_id)
    except StoreError as exc:
        raise NotFoundError("member not found", key="message") from exc

    try:
        await store.update(member_id, member)
    except StoreError as exc:
        raise BadRequestError("member update failed") from exc

    return MessageResponse(message="member updated")


@router.delete(
    "/member/{member_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Member still holds books", "model": MessageResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a member",
)
async def delete_member(
    member_id: str,
    store: MemberStore = Depends(get_member_store),
) -> MessageResponse:
    try:
        await store.delete(member_id)
    except ForeignKeyViolationError as exc:
        raise BadRequestError(
            "member still has books, all books must be returned", key="message"
        ) from exc
    except StoreError as exc:
        raise ServerError() from exc

    return MessageResponse(message="member deleted")
