from app.dependencies.dependencies import (
    OptionalPrincipalDep,
    PlannerDep,
    PrincipalDep,
    SessionDep,
    StoreDep,
    get_current_principal,
    get_optional_principal,
    get_planner_state,
    get_store_state,
    get_trip_session,
)

__all__ = [
    "OptionalPrincipalDep",
    "PlannerDep",
    "PrincipalDep",
    "SessionDep",
    "StoreDep",
    "get_current_principal",
    "get_optional_principal",
    "get_planner_state",
    "get_store_state",
    "get_trip_session",
]
