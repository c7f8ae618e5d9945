"""
User Repository

Read-only access to principals maintained by the identity provider.
"""

from typing import Optional

from teamhub.models.user import User
from teamhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    collection_name = "users"
    model_class = User

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find_one({"email": email})
