"""
Security repositories: users, roles, groups, permissions and authorities.

Link tables are only touched through the ORM collections (`user.roles.append(...)`),
so the association rows follow the session's unit of work like any other write.
"""

import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from raas.exceptions.mapper import db_error_handler
from raas.models.security import Authority, Group, Permission, Role, User
from .base_repository import BaseRepository, PageRequest, PageResult

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    search_fields = ("username", "email")
    relations = ("roles", "groups")

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_username(self, username: str) -> User | None:
        return await self.find_one(User.username == username.strip())

    async def get_by_email(self, email: str) -> User | None:
        """Emails compare case-insensitively."""
        return await self.find_one(func.lower(User.email) == email.strip().lower())

    async def by_enabled(self, enabled: bool, page: PageRequest) -> PageResult[User]:
        return await self.paginate(page, User.enabled.is_(enabled))

    async def add_role(self, user: User, role: Role) -> bool:
        """
        Link `role` to `user`. `user` must have been loaded with its roles.

        Returns False when the link already existed (nothing written).
        """
        if any(r.id == role.id for r in user.roles):
            return False
        async with db_error_handler(self.db, User):
            user.roles.append(role)
            await self.db.flush()
        logger.info("repo.user.role_added", extra={"user_id": user.id, "role_id": role.id})
        return True

    async def remove_role(self, user: User, role: Role) -> bool:
        """Returns False when the user did not hold the role."""
        linked = [r for r in user.roles if r.id == role.id]
        if not linked:
            return False
        async with db_error_handler(self.db, User):
            user.roles.remove(linked[0])
            await self.db.flush()
        logger.info("repo.user.role_removed", extra={"user_id": user.id, "role_id": role.id})
        return True


class RoleRepository(BaseRepository[Role]):
    search_fields = ("name", "description")
    relations = ("permissions",)

    def __init__(self, db: AsyncSession):
        super().__init__(Role, db)

    async def add_permission(self, role: Role, permission: Permission) -> bool:
        """`role` must have been loaded with its permissions."""
        if any(p.id == permission.id for p in role.permissions):
            return False
        async with db_error_handler(self.db, Role):
            role.permissions.append(permission)
            await self.db.flush()
        logger.info("repo.role.permission_added", extra={"role_id": role.id, "permission_id": permission.id})
        return True


class GroupRepository(BaseRepository[Group]):
    search_fields = ("name", "description")
    relations = ("roles",)

    def __init__(self, db: AsyncSession):
        super().__init__(Group, db)

    async def add_role(self, group: Group, role: Role) -> bool:
        """`group` must have been loaded with its roles."""
        if any(r.id == role.id for r in group.roles):
            return False
        async with db_error_handler(self.db, Group):
            group.roles.append(role)
            await self.db.flush()
        logger.info("repo.group.role_added", extra={"group_id": group.id, "role_id": role.id})
        return True


class PermissionRepository(BaseRepository[Permission]):
    search_fields = ("name", "description")
    relations = ("authority",)

    def __init__(self, db: AsyncSession):
        super().__init__(Permission, db)

    async def by_authority(self, authority_id: int, page: PageRequest) -> PageResult[Permission]:
        return await self.paginate(page, Permission.authority_id == authority_id)


class AuthorityRepository(BaseRepository[Authority]):
    search_fields = ("name", "description")
    relations = ("permissions",)

    def __init__(self, db: AsyncSession):
        super().__init__(Authority, db)
