from sqlalchemy.ext.asyncio import AsyncSession

from raas.models.collaborators import Document, Structure
from .base_repository import BaseRepository


class StructureRepository(BaseRepository[Structure]):
    search_fields = ("designation_fr", "designation_en", "designation_ar", "acronym_fr")

    def __init__(self, db: AsyncSession):
        super().__init__(Structure, db)


class DocumentRepository(BaseRepository[Document]):
    search_fields = ("reference",)

    def __init__(self, db: AsyncSession):
        super().__init__(Document, db)
