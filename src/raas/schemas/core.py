from .common import DTO


class CurrencyDTO(DTO):
    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None
    code_ar: str | None = None
    code_lt: str | None = None


class DesignationDTO(DTO):
    """Shape shared by the designation-only referentials."""

    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None


class ApprovalStatusDTO(DesignationDTO):
    pass


class RealizationDirectorDTO(DesignationDTO):
    pass


class RealizationNatureDTO(DesignationDTO):
    pass


class RealizationStatusDTO(DesignationDTO):
    pass
