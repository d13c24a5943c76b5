import logging
from datetime import datetime
from typing import Optional

from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartretire.core.config import settings
from smartretire.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_open_id(self, open_id: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.openId == open_id))
        return result.scalars().first()

    async def upsert_user(
        self,
        open_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        login_method: Optional[str] = None,
        role: Optional[str] = None,
    ) -> User:
        """
        Inserts or refreshes the user behind an identity-provider openId.

        Only the profile fields that are passed are written; `lastSignedIn`
        is always stamped. The configured owner is promoted to admin unless
        an explicit role is given.
        """
        if not open_id:
            raise ValueError("User openId is required for upsert")

        now = datetime.utcnow()
        user = await self.get_by_open_id(open_id)
        if user is None:
            user = User(openId=open_id)
            logger.info(f"Creating user for openId {open_id}")

        for key, value in (("name", name), ("email", email), ("loginMethod", login_method)):
            if value is not None:
                setattr(user, key, value)

        if role is not None:
            user.role = role
        elif settings.OWNER_OPEN_ID and open_id == settings.OWNER_OPEN_ID:
            user.role = "admin"

        user.lastSignedIn = now
        user.updatedAt = now
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user
