from fastapi import APIRouter

from raas.services.collaborators import DocumentService, StructureService
from .crud import register_crud_routes

structure_router = register_crud_routes(APIRouter(prefix="/structure", tags=["structure"]), StructureService)
document_router = register_crud_routes(APIRouter(prefix="/document", tags=["document"]), DocumentService)

routers = [structure_router, document_router]
