"""
Perk endpoints for API v1.

The handlers are thin: they pull the raw JSON body or query parameter,
hand it to ``PerkService`` and wrap the result in the response shape.
Errors raised by the service (validation, not found, conflict) are
turned into ``{"message": ...}`` responses by the exception handlers
registered in ``main``.

Request bodies are accepted as plain JSON values rather than typed
models so that the service can tell an absent key from one sent with
an empty or zero value.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from perks_api.app.schemas.perk import DeleteConfirmation, ErrorMessage, PerkEnvelope, PerkList
from perks_api.app.services.perk_service import PerkService

router = APIRouter()


def get_perk_service() -> PerkService:
    """Dependency returning the service; override it in tests."""
    return PerkService()


@router.get("/", response_model=PerkList)
async def list_perks(service: PerkService = Depends(get_perk_service)) -> PerkList:
    """Return all perks, most recently created first."""
    return await service.list_perks()


@router.get(
    "/filter",
    response_model=PerkList,
    responses={400: {"model": ErrorMessage}},
)
async def filter_perks(
    title: Optional[str] = Query(None, description="Exact title to match"),
    service: PerkService = Depends(get_perk_service),
) -> PerkList:
    """Return perks whose title matches ``title`` exactly.

    This is an equality lookup, not a substring search: ``Coffee``
    does not match ``Coffee Deal``.
    """
    return await service.filter_perks(title)


@router.get(
    "/{perk_id}",
    response_model=PerkEnvelope,
    responses={404: {"model": ErrorMessage}},
)
async def get_perk(perk_id: str, service: PerkService = Depends(get_perk_service)) -> PerkEnvelope:
    perk = await service.get_perk(perk_id)
    return PerkEnvelope(perk=perk)


@router.post(
    "/",
    response_model=PerkEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorMessage}, 409: {"model": ErrorMessage}},
)
async def create_perk(
    payload: Any = Body(...),
    service: PerkService = Depends(get_perk_service),
) -> PerkEnvelope:
    """Create a perk.  ``title`` is required; other fields get defaults."""
    perk = await service.create_perk(payload)
    return PerkEnvelope(perk=perk)


@router.put(
    "/{perk_id}",
    response_model=PerkEnvelope,
    responses={400: {"model": ErrorMessage}, 404: {"model": ErrorMessage}, 409: {"model": ErrorMessage}},
)
@router.patch(
    "/{perk_id}",
    response_model=PerkEnvelope,
    responses={400: {"model": ErrorMessage}, 404: {"model": ErrorMessage}, 409: {"model": ErrorMessage}},
)
async def update_perk(
    perk_id: str,
    payload: Any = Body(None),
    service: PerkService = Depends(get_perk_service),
) -> PerkEnvelope:
    """Update only the supplied fields of a perk.

    Both PUT and PATCH have partial semantics; fields missing from the
    body keep their stored values.
    """
    perk = await service.update_perk(perk_id, {} if payload is None else payload)
    return PerkEnvelope(perk=perk)


@router.delete(
    "/{perk_id}",
    response_model=DeleteConfirmation,
    responses={404: {"model": ErrorMessage}},
)
async def delete_perk(
    perk_id: str,
    service: PerkService = Depends(get_perk_service),
) -> DeleteConfirmation:
    await service.delete_perk(perk_id)
    return DeleteConfirmation(ok=True)
