"""Annotation storage. Append-only: no update or delete."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import Annotation


class AnnotationService:
    """Insert and list annotations."""

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Annotation]:
        result = await db.execute(select(Annotation).order_by(Annotation.id))
        return list(result.scalars().all())

    @staticmethod
    async def create(
        db: AsyncSession, x: float, y: float, z: float, note: str
    ) -> Annotation:
        """Insert one annotation and return the stored row.

        Identical coordinates are not deduplicated; every call adds a row.
        """
        annotation = Annotation(x=x, y=y, z=z, note=note)
        db.add(annotation)
        await db.commit()
        await db.refresh(annotation)
        return annotation
