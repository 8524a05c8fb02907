"""Art routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Path, Request, Response, status

from emblem.routes.dependencies import get_art_service, get_authenticated_principal
from emblem.schemas.art import Art, CastVoteRequest, Comment, CreateCommentRequest, Place, PlaceArtRequest, Vote
from emblem.schemas.auth import AuthPrincipal
from emblem.schemas.error import ErrorResponse, NoLeakNotFoundError, StorageUploadError
from emblem.services.art import ArtService

router = APIRouter(tags=["Art"])

_AUTH_RESPONSES = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


async def _read_upload(request: Request, file_type: str | None) -> tuple[bytes, str | None]:
    """Return asset bytes and content type from a raw or multipart upload."""
    content_type = request.headers.get("content-type", "").lower()
    if not content_type.startswith("multipart/form-data"):
        return await request.body(), file_type

    form = await request.form()
    upload = next((value for value in form.values() if not isinstance(value, str)), None)
    if upload is None:
        return b"", file_type
    return await upload.read(), file_type or upload.content_type


@router.post(
    "/art",
    response_model=Art,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_RESPONSES, 502: {"model": StorageUploadError}},
)
async def upload_art(
    request: Request,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ArtService, Depends(get_art_service)],
    file_type: Annotated[str | None, Header(alias="File-Type")] = None,
) -> Art:
    data, file_type = await _read_upload(request, file_type)
    return service.upload_art(owner_id=principal.user_id, content_type=file_type, data=data)


@router.get("/art", response_model=list[Art])
async def list_art(service: Annotated[ArtService, Depends(get_art_service)]) -> list[Art]:
    return service.list_art()


@router.get(
    "/art/{artId}",
    response_model=Art,
    responses={404: {"model": NoLeakNotFoundError}},
)
async def get_art(
    art_id: Annotated[str, Path(alias="artId")],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> Art:
    return service.get_art(art_id)


@router.get(
    "/art/{artId}/download",
    response_class=Response,
    responses={200: {"content": {"application/octet-stream": {}}}, 404: {"model": NoLeakNotFoundError}},
)
async def download_art(
    art_id: Annotated[str, Path(alias="artId")],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> Response:
    stored = service.download_art(art_id)
    return Response(content=stored.data, media_type=stored.content_type)


@router.delete(
    "/art/{artId}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def delete_art(
    art_id: Annotated[str, Path(alias="artId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> Response:
    service.delete_art(owner_id=principal.user_id, art_id=art_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/art/{artId}/place",
    response_model=Art,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def place_art(
    art_id: Annotated[str, Path(alias="artId")],
    payload: PlaceArtRequest,
    _: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> Art:
    return service.place_art(art_id=art_id, lat=payload.lat, long=payload.long)


@router.get(
    "/art/{artId}/places",
    response_model=list[Place],
    responses={404: {"model": NoLeakNotFoundError}},
)
async def list_places(
    art_id: Annotated[str, Path(alias="artId")],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> list[Place]:
    return service.list_places(art_id)


@router.post(
    "/art/{artId}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def add_comment(
    art_id: Annotated[str, Path(alias="artId")],
    payload: CreateCommentRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> Comment:
    return service.add_comment(art_id=art_id, author_id=principal.user_id, title=payload.title)


@router.get(
    "/art/{artId}/comments",
    response_model=list[Comment],
    responses={404: {"model": NoLeakNotFoundError}},
)
async def list_comments(
    art_id: Annotated[str, Path(alias="artId")],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> list[Comment]:
    return service.list_comments(art_id)


@router.post(
    "/art/{artId}/votes",
    response_model=Vote,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def cast_vote(
    art_id: Annotated[str, Path(alias="artId")],
    payload: CastVoteRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> Vote:
    return service.cast_vote(art_id=art_id, voter_id=principal.user_id, value=payload.vote)


@router.get(
    "/art/{artId}/votes",
    response_model=list[Vote],
    responses={404: {"model": NoLeakNotFoundError}},
)
async def list_votes(
    art_id: Annotated[str, Path(alias="artId")],
    service: Annotated[ArtService, Depends(get_art_service)],
) -> list[Vote]:
    return service.list_votes(art_id)


@router.get("/places/{sector}/art", response_model=list[Art])
async def list_art_in_sector(
    sector: str,
    service: Annotated[ArtService, Depends(get_art_service)],
) -> list[Art]:
    return service.list_art_in_sector(sector)
