import pytest

from raas.exceptions.base import (
    DuplicateError,
    DuplicateValueError,
    InvalidFieldError,
    MissingFieldError,
    NotFoundError,
    ReferenceNotFoundError,
)
from raas.models import Item, Rubric
from raas.repositories.base_repository import PageRequest, to_snake


@pytest.mark.asyncio
class TestBaseRepositoryCreate:

    async def test_create_success(self, domain_repo):
        """
        Behavior:
            - Call BaseRepository.create(...) with valid data.
            - The returned entity carries a generated integer id.

        Importance:
            - Confirms the happy path of create(): add, flush inside a savepoint, refresh.

        Notes:
            - Nothing is committed; the row lives until the test transaction is rolled back.
        """
        domain = await domain_repo.create(designation_fr="Informatique", designation_en="Computing")

        assert isinstance(domain.id, int)
        assert domain.designation_fr == "Informatique"
        assert domain.designation_ar is None

    async def test_create_with_unknown_field(self, domain_repo):
        with pytest.raises(InvalidFieldError) as exc_info:
            await domain_repo.create(designation_fr="Informatique", colour="red", size=3)

        assert exc_info.value.fields == ["colour", "size"]
        assert exc_info.value.http_status() == 422


@pytest.mark.asyncio
class TestDatabaseConstraints:
    """Writes that skip the validation pipeline still hit the table constraints."""

    async def test_duplicate_is_mapped_from_integrity_error(self, domain_repo):
        """
        Behavior:
            - Insert the same designation twice straight through the repository.
            - The IntegrityError is translated into DuplicateValueError on the attribute name.

        Importance:
            - Two concurrent requests can both pass the uniqueness pre-check; the
              database constraint is the last word and still yields a 409.
        """
        await domain_repo.create(designation_fr="Réseaux")

        with pytest.raises(DuplicateValueError) as exc_info:
            await domain_repo.create(designation_fr="Réseaux")

        assert isinstance(exc_info.value, DuplicateError)
        assert exc_info.value.error_code == "duplicate"
        assert exc_info.value.fields == ["designation_fr"]
        assert exc_info.value.http_status() == 409

    async def test_session_is_usable_after_a_failed_write(self, domain_repo):
        await domain_repo.create(designation_fr="Réseaux")
        with pytest.raises(DuplicateValueError):
            await domain_repo.create(designation_fr="Réseaux")

        other = await domain_repo.create(designation_fr="Télécoms")

        assert other.id is not None
        assert await domain_repo.count() == 2

    async def test_not_null_is_mapped_to_missing_field(self, domain_repo):
        with pytest.raises(MissingFieldError) as exc_info:
            await domain_repo.create(designation_en="Computing")

        assert exc_info.value.fields == ["designation_fr"]

    async def test_foreign_key_is_mapped_to_missing_reference(self, rubric_repo):
        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await rubric_repo.create(designation_fr="Matériel", domain_id=999_999)

        assert exc_info.value.http_status() == 422


@pytest.mark.asyncio
class TestBaseRepositoryRead:

    async def test_get_by_id_or_raise(self, domain_repo):
        domain = await domain_repo.create(designation_fr="Informatique")

        assert (await domain_repo.get_by_id_or_raise(domain.id)).id == domain.id
        with pytest.raises(NotFoundError) as exc_info:
            await domain_repo.get_by_id_or_raise(domain.id + 1000, "Domain")
        assert exc_info.value.message == f"Domain not found with ID: {domain.id + 1000}"

    async def test_find_by_field(self, domain_repo):
        domain = await domain_repo.create(designation_fr="Informatique")

        assert (await domain_repo.find_by_field("designation_fr", "Informatique")).id == domain.id
        assert await domain_repo.find_by_field("designation_fr", "Absent") is None
        with pytest.raises(InvalidFieldError):
            await domain_repo.find_by_field("colour", "red")

    async def test_find_all_and_exists_by(self, domain_repo):
        first = await domain_repo.create(designation_fr="A", designation_en="shared")
        second = await domain_repo.create(designation_fr="B", designation_en="shared")

        found = await domain_repo.find_all(domain_repo.model.designation_en == "shared")

        assert [d.id for d in found] == [first.id, second.id]
        assert await domain_repo.exists_by(designation_fr="B", designation_en="shared")
        assert not await domain_repo.exists_by(designation_fr="B", designation_en="other")

    async def test_paginate(self, domain_repo):
        for name in ("d", "a", "c", "b", "e"):
            await domain_repo.create(designation_fr=name)

        result = await domain_repo.paginate(PageRequest(page=1, size=2, sort_by="designationFr"))

        assert [d.designation_fr for d in result.items] == ["c", "d"]
        assert result.total == 5
        assert result.pages == 3

    async def test_page_past_the_end_is_empty(self, domain_repo):
        await domain_repo.create(designation_fr="seul")

        result = await domain_repo.paginate(PageRequest(page=4, size=10))

        assert result.items == []
        assert result.total == 1

    async def test_search_blank_term_lists_everything(self, domain_repo):
        await domain_repo.create(designation_fr="Informatique")
        await domain_repo.create(designation_fr="Énergie")

        assert (await domain_repo.search("   ", PageRequest())).total == 2
        assert (await domain_repo.search("FORMAT", PageRequest())).total == 1

    @pytest.mark.parametrize("term, expected", [("%", ["Taux 5%"]), ("_", ["Code_A"]), ("5%", ["Taux 5%"])])
    async def test_search_wildcards_are_literal(self, domain_repo, term, expected):
        """
        Behavior:
            - `%` and `_` in a search term match those characters only.
        Importance:
            - A bare `%` must not turn a search into an unfiltered listing.
        """
        for name in ("Informatique", "Taux 5%", "Code_A", "Énergie"):
            await domain_repo.create(designation_fr=name)

        result = await domain_repo.search(term, PageRequest())

        assert [d.designation_fr for d in result.items] == expected

    async def test_count_with_filters(self, domain_repo):
        await domain_repo.create(designation_fr="A", designation_en="x")
        await domain_repo.create(designation_fr="B", designation_en="y")

        assert await domain_repo.count() == 2
        assert await domain_repo.count(designation_en="x") == 1
        # unknown attributes and None values are ignored
        assert await domain_repo.count(colour="red", designation_en=None) == 2

    async def test_count_related(self, domain_repo, rubric_repo, db_session):
        domain = await domain_repo.create(designation_fr="Informatique")
        rubric = await rubric_repo.create(designation_fr="Matériel", domain_id=domain.id)
        db_session.add(Item(designation_fr="Serveur", rubric_id=rubric.id))
        await db_session.flush()

        assert await domain_repo.count_related(Rubric, "domain_id", domain.id) == 1
        assert await rubric_repo.count_related(Item, "rubric_id", rubric.id) == 1
        assert await rubric_repo.count_related(Item, "rubric_id", rubric.id + 1) == 0


@pytest.mark.asyncio
class TestBaseRepositoryWrite:

    async def test_update_writes_none(self, domain_repo):
        domain = await domain_repo.create(designation_fr="Informatique", designation_en="Computing")

        updated = await domain_repo.update(domain, designation_en=None)

        assert updated.designation_en is None
        assert updated.designation_fr == "Informatique"

    async def test_update_into_duplicate(self, domain_repo):
        await domain_repo.create(designation_fr="A")
        second = await domain_repo.create(designation_fr="B")

        with pytest.raises(DuplicateValueError):
            await domain_repo.update(second, designation_fr="A")

    async def test_delete(self, domain_repo):
        domain = await domain_repo.create(designation_fr="Éphémère")

        await domain_repo.delete(domain)

        assert not await domain_repo.exists(domain.id)


class TestHelpers:

    @pytest.mark.parametrize(
        "name, expected",
        [("budgetYear", "budget_year"), ("designationFr", "designation_fr"), ("budget_year", "budget_year"),
         ("id", "id")],
    )
    def test_to_snake(self, name, expected):
        assert to_snake(name) == expected

    def test_offset(self):
        assert PageRequest(page=3, size=5).offset == 15
