from raas.models import BudgetModification, Document, ItemDistribution, Structure
from raas.repositories.collaborators import DocumentRepository, StructureRepository
from raas.schemas import DocumentDTO, StructureDTO
from raas.validators import rules as entity_rules
from .base import BaseService, DeleteGuard


class StructureService(BaseService[Structure, StructureDTO]):
    model = Structure
    rules = entity_rules.STRUCTURE
    dto_cls = StructureDTO
    repository_cls = StructureRepository
    delete_guards = (DeleteGuard(ItemDistribution, "structure_id", "item distributions"),)


class DocumentService(BaseService[Document, DocumentDTO]):
    model = Document
    rules = entity_rules.DOCUMENT
    dto_cls = DocumentDTO
    repository_cls = DocumentRepository
    delete_guards = (
        DeleteGuard(BudgetModification, "demande_id", "budget modifications as demande"),
        DeleteGuard(BudgetModification, "response_id", "budget modifications as response"),
    )
