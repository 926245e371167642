import pytest

from raas.exceptions.base import (
    DuplicateValueError,
    FieldTooLongError,
    InvariantViolationError,
    MissingFieldError,
    NotFoundError,
    ReferenceNotFoundError,
)
from raas.models import User
from raas.schemas import (
    AuthorityDTO,
    GroupDTO,
    PermissionDTO,
    RoleDTO,
    UserDTO,
    UserWriteDTO,
)


async def stored_hash(db_session, user_id: int) -> str:
    user = await db_session.get(User, user_id)
    return user.password


@pytest.fixture
async def alice(user_service) -> UserDTO:
    return await user_service.create(
        UserWriteDTO(username="alice", email="alice@example.org", password=" s3cret pass ")
    )


@pytest.mark.asyncio
class TestUserPasswords:

    async def test_password_is_hashed_and_never_returned(self, alice, db_session):
        """
        Behavior:
            - The stored value is a bcrypt hash, not the submitted text.
            - The returned DTO has no password field at all.
        Importance:
            - Plain-text passwords never reach storage or clients.
        """
        hashed = await stored_hash(db_session, alice.id)

        assert hashed != " s3cret pass "
        assert hashed.startswith("$2")
        assert "password" not in alice.model_dump()
        assert alice.enabled is True

    async def test_password_is_hashed_exactly_as_sent(self, user_service, alice):
        assert await user_service.verify_password("alice", " s3cret pass ")
        assert not await user_service.verify_password("alice", "s3cret pass")
        assert not await user_service.verify_password("nobody", " s3cret pass ")

    async def test_disabled_user_cannot_authenticate(self, user_service, alice):
        await user_service.update(
            alice.id, UserWriteDTO(username="alice", email="alice@example.org", enabled=False)
        )
        assert not await user_service.verify_password("alice", " s3cret pass ")

    async def test_update_without_password_keeps_hash(self, user_service, alice, db_session):
        before = await stored_hash(db_session, alice.id)

        updated = await user_service.update(
            alice.id, UserWriteDTO(username="alice", email="alice@new.example.org", password="   ")
        )

        assert updated.email == "alice@new.example.org"
        assert await stored_hash(db_session, alice.id) == before

    async def test_update_with_password_rehashes(self, user_service, alice):
        await user_service.update(
            alice.id, UserWriteDTO(username="alice", email="alice@example.org", password="another-one")
        )
        assert await user_service.verify_password("alice", "another-one")

    async def test_password_required_on_create(self, user_service):
        with pytest.raises(MissingFieldError) as exc_info:
            await user_service.create(UserWriteDTO(username="bob", email="bob@example.org"))
        assert exc_info.value.message == "Password is required for create"

    async def test_overlong_password_is_refused(self, user_service):
        with pytest.raises(FieldTooLongError):
            await user_service.create(UserWriteDTO(username="bob", email="bob@example.org", password="x" * 73))


@pytest.mark.asyncio
class TestUserLookups:

    async def test_username_and_email_are_unique(self, user_service, alice):
        with pytest.raises(DuplicateValueError) as exc_info:
            await user_service.create(UserWriteDTO(username="alice", email="other@example.org", password="pw"))
        assert exc_info.value.fields == ["username"]

        with pytest.raises(DuplicateValueError) as exc_info:
            await user_service.create(UserWriteDTO(username="alice2", email="alice@example.org", password="pw"))
        assert exc_info.value.fields == ["email"]

    async def test_email_uniqueness_ignores_case(self, user_service, alice):
        """
        Behavior:
            - An email differing from an existing one only by case is a duplicate,
              on create and on update of another user.
        Importance:
            - Email lookups ignore case; two rows matching one address would make
              the lookup pick one of them arbitrarily.
        """
        with pytest.raises(DuplicateValueError) as exc_info:
            await user_service.create(UserWriteDTO(username="alice2", email="Alice@Example.ORG", password="pw"))
        assert exc_info.value.fields == ["email"]

        bob = await user_service.create(UserWriteDTO(username="bob", email="bob@example.org", password="pw"))
        with pytest.raises(DuplicateValueError):
            await user_service.update(bob.id, UserWriteDTO(username="bob", email="ALICE@example.org"))

        # changing only the case of one's own address is not a collision
        renamed = await user_service.update(alice.id, UserWriteDTO(username="alice", email="Alice@example.org"))
        assert renamed.email == "Alice@example.org"

    async def test_lookup_by_username_and_email(self, user_service, alice):
        assert (await user_service.get_by_username("alice")).id == alice.id
        assert (await user_service.get_by_email("ALICE@example.org")).id == alice.id
        assert await user_service.get_by_username("nobody") is None

    async def test_by_enabled(self, user_service, alice):
        await user_service.create(
            UserWriteDTO(username="carol", email="carol@example.org", password="pw", enabled=False)
        )
        page = user_service.page_request()

        enabled = await user_service.by_enabled(True, page)
        disabled = await user_service.by_enabled(False, page)

        assert [u.username for u in enabled.items] == ["alice"]
        assert [u.username for u in disabled.items] == ["carol"]


@pytest.mark.asyncio
class TestRoleAssignment:

    @pytest.fixture
    async def auditor(self, role_service) -> RoleDTO:
        return await role_service.create(RoleDTO(name="AUDITOR", description="Read-only access"))

    async def test_assign_and_remove(self, user_service, alice, auditor):
        assigned = await user_service.assign_role(alice.id, auditor.id)
        assert [r.name for r in assigned.roles] == ["AUDITOR"]

        # assigning twice is a no-op
        again = await user_service.assign_role(alice.id, auditor.id)
        assert len(again.roles) == 1

        removed = await user_service.remove_role(alice.id, auditor.id)
        assert removed.roles == []

    async def test_unknown_role(self, user_service, alice):
        with pytest.raises(NotFoundError) as exc_info:
            await user_service.assign_role(alice.id, 999_999)
        assert exc_info.value.message == "Role not found with ID: 999999"

    async def test_unknown_user(self, user_service, auditor):
        with pytest.raises(NotFoundError):
            await user_service.assign_role(999_999, auditor.id)

    async def test_assigned_role_cannot_be_deleted(self, user_service, role_service, alice, auditor):
        await user_service.assign_role(alice.id, auditor.id)

        with pytest.raises(InvariantViolationError):
            await role_service.delete(auditor.id)
        assert await role_service.exists(auditor.id)

    async def test_group_grants_role(self, group_service, auditor):
        group = await group_service.create(GroupDTO(name="Controllers"))

        expanded = await group_service.assign_role(group.id, auditor.id)

        assert [r.id for r in expanded.roles] == [auditor.id]


@pytest.mark.asyncio
class TestPermissions:

    async def test_permission_requires_existing_authority(self, permission_service):
        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await permission_service.create(PermissionDTO(name="plan:read", authority_id=424242))
        assert exc_info.value.message == "Authority not found with ID: 424242"

    async def test_role_bundles_permissions(self, authority_service, permission_service, role_service):
        authority = await authority_service.create(AuthorityDTO(name="PLANNING"))
        permission = await permission_service.create(PermissionDTO(name="plan:write", authority_id=authority.id))
        role = await role_service.create(RoleDTO(name="PLANNER"))

        expanded = await role_service.assign_permission(role.id, permission.id)

        assert [p.name for p in expanded.permissions] == ["plan:write"]
        by_authority = await permission_service.by_authority(authority.id, permission_service.page_request())
        assert [p.id for p in by_authority.items] == [permission.id]

        with pytest.raises(InvariantViolationError):
            await authority_service.delete(authority.id)
        with pytest.raises(InvariantViolationError):
            await permission_service.delete(permission.id)
