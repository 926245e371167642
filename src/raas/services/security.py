"""
Security services: users, roles, groups, permissions and authorities.

Passwords are hashed by the injected `PasswordHasher` before they reach the
repository. User DTOs never carry the hash back out.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from raas.config import Settings
from raas.exceptions.base import NotFoundError
from raas.models import Authority, Group, Permission, Role, User
from raas.models.security import group_roles, role_permissions, user_roles
from raas.repositories.base_repository import PageRequest
from raas.repositories.security import (
    AuthorityRepository,
    GroupRepository,
    PermissionRepository,
    RoleRepository,
    UserRepository,
)
from raas.schemas import (
    AuthorityDTO,
    AuthorityWithRelations,
    GroupDTO,
    GroupWithRelations,
    Page,
    PermissionDTO,
    PermissionWithRelations,
    RoleDTO,
    RoleWithRelations,
    UserDTO,
    UserWithRelations,
    UserWriteDTO,
)
from raas.security.hashing import BcryptPasswordHasher, PasswordHasher
from raas.validators import rules as entity_rules
from raas.validators.engine import EntityRules
from .base import BaseService, DeleteGuard

logger = logging.getLogger(__name__)


class UserService(BaseService[User, UserDTO]):
    model = User
    rules = entity_rules.USER
    dto_cls = UserDTO
    relations_dto_cls = UserWithRelations
    repository_cls = UserRepository

    def __init__(self, db: AsyncSession, settings: Settings | None = None,
                 hasher: PasswordHasher | None = None):
        super().__init__(db, settings)
        self.hasher = hasher or BcryptPasswordHasher(rounds=self.settings.PASSWORD_HASH_ROUNDS)

    @property
    def update_rules(self) -> EntityRules:
        return entity_rules.USER_UPDATE

    async def prepare_create(self, data: dict[str, Any], dto: UserWriteDTO) -> dict[str, Any]:
        # hash the password exactly as sent, not the trimmed value
        data["password"] = self.hasher.hash(dto.password)
        if data.get("enabled") is None:
            data["enabled"] = True
        return data

    async def prepare_update(self, entity: User, data: dict[str, Any], dto: UserWriteDTO) -> dict[str, Any]:
        if data.get("password") is None:
            data.pop("password", None)
        else:
            data["password"] = self.hasher.hash(dto.password)
        if data.get("enabled") is None:
            data.pop("enabled", None)
        return data

    async def get_by_username(self, username: str) -> UserDTO | None:
        user = await self.repo.get_by_username(username)
        return UserDTO.model_validate(user) if user is not None else None

    async def get_by_email(self, email: str) -> UserDTO | None:
        user = await self.repo.get_by_email(email)
        return UserDTO.model_validate(user) if user is not None else None

    async def by_enabled(self, enabled: bool, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_enabled(enabled, page))

    async def verify_password(self, username: str, password: str) -> bool:
        """Credential check for callers that authenticate elsewhere; unknown users simply fail."""
        user = await self.repo.get_by_username(username)
        if user is None or not user.enabled:
            return False
        return self.hasher.verify(password, user.password)

    # =================================================================================================================
    # Role assignment
    # =================================================================================================================

    async def _load_user_and_role(self, user_id: int, role_id: int) -> tuple[User, Role]:
        user = await self.repo.get_with_relations(user_id)
        if user is None:
            raise NotFoundError(f"{self.kind} not found with ID: {user_id}")
        role = await RoleRepository(self.db).get_by_id_or_raise(role_id, "Role")
        return user, role

    async def assign_role(self, user_id: int, role_id: int) -> UserWithRelations:
        """Link a role to a user; assigning a role the user already holds is a no-op."""
        user, role = await self._load_user_and_role(user_id, role_id)
        if await self.repo.add_role(user, role):
            await self.db.commit()
        return UserWithRelations.model_validate(user)

    async def remove_role(self, user_id: int, role_id: int) -> UserWithRelations:
        user, role = await self._load_user_and_role(user_id, role_id)
        if await self.repo.remove_role(user, role):
            await self.db.commit()
        return UserWithRelations.model_validate(user)


class RoleService(BaseService[Role, RoleDTO]):
    model = Role
    rules = entity_rules.ROLE
    dto_cls = RoleDTO
    relations_dto_cls = RoleWithRelations
    repository_cls = RoleRepository
    delete_guards = (
        DeleteGuard(user_roles, "F_02", "user assignments"),
        DeleteGuard(group_roles, "F_02", "group assignments"),
    )

    async def assign_permission(self, role_id: int, permission_id: int) -> RoleWithRelations:
        role = await self.repo.get_with_relations(role_id)
        if role is None:
            raise NotFoundError(f"{self.kind} not found with ID: {role_id}")
        permission = await PermissionRepository(self.db).get_by_id_or_raise(permission_id, "Permission")
        if await self.repo.add_permission(role, permission):
            await self.db.commit()
        return RoleWithRelations.model_validate(role)


class GroupService(BaseService[Group, GroupDTO]):
    model = Group
    rules = entity_rules.GROUP
    dto_cls = GroupDTO
    relations_dto_cls = GroupWithRelations
    repository_cls = GroupRepository

    async def assign_role(self, group_id: int, role_id: int) -> GroupWithRelations:
        group = await self.repo.get_with_relations(group_id)
        if group is None:
            raise NotFoundError(f"{self.kind} not found with ID: {group_id}")
        role = await RoleRepository(self.db).get_by_id_or_raise(role_id, "Role")
        if await self.repo.add_role(group, role):
            await self.db.commit()
        return GroupWithRelations.model_validate(group)


class PermissionService(BaseService[Permission, PermissionDTO]):
    model = Permission
    rules = entity_rules.PERMISSION
    dto_cls = PermissionDTO
    relations_dto_cls = PermissionWithRelations
    repository_cls = PermissionRepository
    delete_guards = (DeleteGuard(role_permissions, "F_02", "role assignments"),)

    async def by_authority(self, authority_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_authority(authority_id, page))


class AuthorityService(BaseService[Authority, AuthorityDTO]):
    model = Authority
    rules = entity_rules.AUTHORITY
    dto_cls = AuthorityDTO
    relations_dto_cls = AuthorityWithRelations
    repository_cls = AuthorityRepository
    delete_guards = (DeleteGuard(Permission, "authority_id", "permissions"),)
