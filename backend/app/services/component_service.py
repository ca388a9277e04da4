"""Component metadata lookup and search."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import Component


class ComponentService:
    """Read-only access to the components table."""

    @staticmethod
    async def get(db: AsyncSession, component_id: str) -> Component | None:
        """Point lookup by id."""
        return await db.get(Component, component_id)

    @staticmethod
    async def search(
        db: AsyncSession, component_type: str, pressure_min: float
    ) -> list[str]:
        """Ids of components with the given type and pressure strictly above ``pressure_min``."""
        result = await db.execute(
            select(Component.id)
            .where(Component.type == component_type)  # type: ignore[arg-type]
            .where(Component.pressure > pressure_min)  # type: ignore[operator]
            .order_by(Component.id)
        )
        return list(result.scalars().all())
