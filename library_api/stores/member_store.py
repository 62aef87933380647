"""Library API: Member Store (SQL implementation of MemberStore over ``members``)."""

import logging
from typing import List

from sqlalchemy import delete, func, insert, select, update

from library_api.exceptions import DatabaseError, RecordNotFoundError
from library_api.models import Member as MemberRow
from library_api.schemas import Member
from library_api.stores.base import MemberStore
from library_api.stores.sql import SQLStore

logger = logging.getLogger(__name__)


class SQLMemberStore(SQLStore, MemberStore):
    """Member persistence backed by SQLAlchemy."""

    async def get(self) -> List[Member]:
        rows = await self._read(
            select(MemberRow.id, MemberRow.full_name),
            "get all failed for members",
        )
        return self._map_rows(Member, rows, "scanning selected failed for members")

    async def create(self, member: Member) -> None:
        await self._write(
            insert(MemberRow).values(id=member.id, full_name=member.full_name),
            "create failed for members",
            id=member.id,
        )

    async def exists(self, member_id: str) -> None:
        try:
            rows = await self._read(
                select(func.count()).select_from(MemberRow).where(MemberRow.id == member_id),
                "select error for member",
                id=member_id,
            )
            count = rows[0][0]
        except (DatabaseError, IndexError, TypeError) as exc:
            raise RecordNotFoundError(
                resource="member",
                resource_id=member_id,
                context={"error": str(exc)},
            ) from exc

        if count != 1:
            logger.info("member does not exist id=%s", member_id)
            raise RecordNotFoundError(resource="member", resource_id=member_id)

    async def update(self, member_id: str, member: Member) -> None:
        await self._write(
            update(MemberRow)
            .where(MemberRow.id == member_id)
            .values(full_name=member.full_name),
            "update failed for members",
            id=member_id,
        )

    async def delete(self, member_id: str) -> None:
        await self._write(
            delete(MemberRow).where(MemberRow.id == member_id),
            "delete failed for members",
            id=member_id,
        )
