"""
Routes for users, roles, groups, permissions and authorities.

Users are written with `UserWriteDTO` (plain-text password in) and always read
back as `UserDTO`, which has no password field.
"""

from fastapi import APIRouter, Depends, Query

from raas.exceptions.base import NotFoundError
from raas.schemas import (
    GroupWithRelations,
    Page,
    PermissionDTO,
    RoleWithRelations,
    UserDTO,
    UserWithRelations,
    UserWriteDTO,
)
from raas.services.security import (
    AuthorityService,
    GroupService,
    PermissionService,
    RoleService,
    UserService,
)
from .crud import register_crud_routes
from .dependencies import PageQuery, page_query, provide_service

# ---------------------------------------------------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------------------------------------------------

user_router = APIRouter(prefix="/user", tags=["user"])
get_user_service = provide_service(UserService)


@user_router.get("/username/{username}", response_model=UserDTO)
async def user_by_username(username: str, service: UserService = Depends(get_user_service)):
    user = await service.get_by_username(username)
    if user is None:
        raise NotFoundError(f"User not found with username: {username}", fields=["username"])
    return user


@user_router.get("/email", response_model=UserDTO)
async def user_by_email(email: str = Query(...), service: UserService = Depends(get_user_service)):
    user = await service.get_by_email(email)
    if user is None:
        raise NotFoundError(f"User not found with email: {email}", fields=["email"])
    return user


@user_router.get("/enabled/{enabled}", response_model=Page[UserDTO])
async def users_by_enabled(enabled: bool, paging: PageQuery = Depends(page_query),
                           service: UserService = Depends(get_user_service)):
    return await service.by_enabled(enabled, paging.for_service(service))


@user_router.post("/{user_id}/roles/{role_id}", response_model=UserWithRelations)
async def assign_role_to_user(user_id: int, role_id: int, service: UserService = Depends(get_user_service)):
    return await service.assign_role(user_id, role_id)


@user_router.delete("/{user_id}/roles/{role_id}", response_model=UserWithRelations)
async def remove_role_from_user(user_id: int, role_id: int, service: UserService = Depends(get_user_service)):
    return await service.remove_role(user_id, role_id)


register_crud_routes(user_router, UserService, write_dto=UserWriteDTO)

# ---------------------------------------------------------------------------------------------------------------------
# Roles, groups
# ---------------------------------------------------------------------------------------------------------------------

role_router = APIRouter(prefix="/role", tags=["role"])


@role_router.post("/{role_id}/permissions/{permission_id}", response_model=RoleWithRelations)
async def assign_permission_to_role(role_id: int, permission_id: int,
                                    service: RoleService = Depends(provide_service(RoleService))):
    return await service.assign_permission(role_id, permission_id)


register_crud_routes(role_router, RoleService)

group_router = APIRouter(prefix="/group", tags=["group"])


@group_router.post("/{group_id}/roles/{role_id}", response_model=GroupWithRelations)
async def assign_role_to_group(group_id: int, role_id: int,
                               service: GroupService = Depends(provide_service(GroupService))):
    return await service.assign_role(group_id, role_id)


register_crud_routes(group_router, GroupService)

# ---------------------------------------------------------------------------------------------------------------------
# Permissions, authorities
# ---------------------------------------------------------------------------------------------------------------------

permission_router = APIRouter(prefix="/permission", tags=["permission"])
get_permission_service = provide_service(PermissionService)


@permission_router.get("/authority/{authority_id}", response_model=Page[PermissionDTO])
async def permissions_by_authority(authority_id: int, paging: PageQuery = Depends(page_query),
                                   service: PermissionService = Depends(get_permission_service)):
    return await service.by_authority(authority_id, paging.for_service(service))


register_crud_routes(permission_router, PermissionService)

authority_router = register_crud_routes(APIRouter(prefix="/authority", tags=["authority"]), AuthorityService)

routers = [user_router, role_router, group_router, permission_router, authority_router]
