# app/dependencies/dependencies.py

"""Application dependencies: shared services and bearer-token identity."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.errors import AuthRequiredError
from app.schemas.trip import Principal
from app.services.planner import TripPlanner
from app.services.session import TripSession
from app.services.storage import TripStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_planner_state(request: Request) -> TripPlanner:
    return request.app.state.planner


def get_store_state(request: Request) -> TripStore:
    return request.app.state.trip_store


PlannerDep = Annotated[TripPlanner, Depends(get_planner_state)]
StoreDep = Annotated[TripStore, Depends(get_store_state)]


async def get_optional_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    store: StoreDep,
) -> Principal | None:
    """Resolve the bearer token through the active store; anonymous callers get ``None``."""
    if credentials is None or not credentials.credentials:
        return None
    return await store.authenticate(credentials.credentials)


OptionalPrincipalDep = Annotated[Principal | None, Depends(get_optional_principal)]


async def get_current_principal(principal: OptionalPrincipalDep) -> Principal:
    """
    Require a signed-in principal.

    Raises:
        AuthRequiredError: No valid bearer token was sent.
    """
    if principal is None:
        raise AuthRequiredError
    return principal


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


def get_trip_session(
    planner: PlannerDep,
    store: StoreDep,
    principal: OptionalPrincipalDep,
) -> TripSession:
    return TripSession(planner=planner, store=store, principal=principal)


SessionDep = Annotated[TripSession, Depends(get_trip_session)]
