"""
Dependency injection providers for the Apothecary API.

Every provider reads from the ApplicationContainer stored on app.state.
"""

from fastapi import Depends, Request

from .container import ApplicationContainer
from .game.disposition_service import DispositionService
from .game.item_service import ItemService
from .game.mastery_service import MasteryService
from .persistence.repositories import TemplateRepository


def get_container(request: Request) -> ApplicationContainer:
    """
    Get the application container from request state.

    This is the root dependency; all other providers use it.
    """
    if not hasattr(request.app.state, "container"):
        raise RuntimeError(
            "ApplicationContainer not found in app.state - ensure container is initialized in lifespan context"
        )
    return request.app.state.container


def get_item_service(request: Request) -> ItemService:
    service = get_container(request).item_service
    assert service is not None, "ItemService not initialized"
    return service


def get_mastery_service(request: Request) -> MasteryService:
    service = get_container(request).mastery_service
    assert service is not None, "MasteryService not initialized"
    return service


def get_disposition_service(request: Request) -> DispositionService:
    service = get_container(request).disposition_service
    assert service is not None, "DispositionService not initialized"
    return service


def get_template_repository(request: Request) -> TemplateRepository:
    repository = get_container(request).template_repository
    assert repository is not None, "TemplateRepository not initialized"
    return repository


ItemServiceDep = Depends(get_item_service)
MasteryServiceDep = Depends(get_mastery_service)
DispositionServiceDep = Depends(get_disposition_service)
TemplateRepositoryDep = Depends(get_template_repository)
