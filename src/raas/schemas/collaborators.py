from datetime import date

from .common import DTO


class StructureDTO(DTO):
    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None
    acronym_fr: str | None = None


class DocumentDTO(DTO):
    id: int | None = None
    reference: str | None = None
    issue_date: date | None = None
