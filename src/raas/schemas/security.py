from pydantic import Field

from .common import DTO


class AuthorityDTO(DTO):
    id: int | None = None
    name: str | None = None
    description: str | None = None


class PermissionDTO(DTO):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    authority_id: int | None = None


class RoleDTO(DTO):
    id: int | None = None
    name: str | None = None
    description: str | None = None


class GroupDTO(DTO):
    id: int | None = None
    name: str | None = None
    description: str | None = None


class UserDTO(DTO):
    """Read model of a user; the password hash is never part of it."""

    id: int | None = None
    username: str | None = None
    email: str | None = None
    enabled: bool | None = None


class UserWriteDTO(DTO):
    """
    Create/update payload. `password` is plain text on the way in and is hashed
    by the service; on update an omitted password keeps the current hash.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = Field(default=None, repr=False)
    enabled: bool | None = None


class AuthorityWithRelations(AuthorityDTO):
    permissions: list[PermissionDTO] = []


class PermissionWithRelations(PermissionDTO):
    authority: AuthorityDTO | None = None


class RoleWithRelations(RoleDTO):
    permissions: list[PermissionDTO] = []


class GroupWithRelations(GroupDTO):
    roles: list[RoleDTO] = []


class UserWithRelations(UserDTO):
    roles: list[RoleDTO] = []
    groups: list[GroupDTO] = []
