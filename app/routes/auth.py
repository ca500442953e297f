"""Authentication routes for signing in and out of the trip store."""

from typing import Annotated

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from app.dependencies import PrincipalDep, StoreDep
from app.schemas.trip import Principal, SignInRequest

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])


@router.post(
    "/sign-in",
    response_class=ORJSONResponse,
    response_model=Principal,
    summary="Sign in",
    description=(
        "Sign in with a Google ID token. The local demo backend ignores the "
        "credential and signs in the demo traveller, whose uid is then the "
        "bearer token for the other routes."
    ),
)
async def sign_in(
    store: StoreDep,
    sign_in_req: Annotated[SignInRequest | None, Body()] = None,
) -> ORJSONResponse:
    credential = sign_in_req.credential if sign_in_req else None
    principal = await store.sign_in(credential)
    return ORJSONResponse(principal.model_dump(mode="json"))


@router.post(
    "/sign-out",
    status_code=HTTP_204_NO_CONTENT,
    summary="Sign out",
)
async def sign_out(_principal: PrincipalDep, store: StoreDep) -> Response:
    """End the current sign-in; requires the signed-in bearer token."""
    await store.sign_out()
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=Principal,
    summary="Get the signed-in principal",
)
async def me(principal: PrincipalDep) -> ORJSONResponse:
    return ORJSONResponse(principal.model_dump(mode="json"))
