# app/routes/trips.py

"""Trip planning, saved-trip and export routes."""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import ORJSONResponse, PlainTextResponse

from app.dependencies import PrincipalDep, SessionDep, StoreDep
from app.errors import TripNotFoundError
from app.schemas.trip import (
    AddPhotosRequest,
    MapMarker,
    PhotoAlbum,
    SavedTrip,
    SessionSnapshot,
    SharePayload,
    TripRequest,
)
from app.services.export import (
    copy_text,
    download_filename,
    map_markers,
    share_payload,
    trip_summary,
)
from app.services.photos import PhotoSort, filter_by_location, photo_locations, sort_photos
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/trips", tags=["🧭 Trips"])


async def _get_trip(store: StoreDep, trip_id: str) -> SavedTrip:
    if trip := await store.get_trip_by_id(trip_id):
        return trip
    raise TripNotFoundError(trip_id=trip_id)


@router.post(
    "/plan",
    response_class=ORJSONResponse,
    response_model=SessionSnapshot,
    summary="Generate a trip plan",
    responses={
        502: {
            "description": "Generation failed outside every fallback",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Something went wrong generating your trip. "
                        "Please check your API key or try again.",
                    },
                },
            },
        },
    },
)
async def plan_trip(trip_request: TripRequest, session: SessionDep) -> ORJSONResponse:
    """
    Generate an itinerary, company list, budget and images for a trip.

    Signed-in callers get the plan saved automatically; the snapshot then
    carries the new trip id and its share link.
    """
    snapshot = await session.submit(trip_request)
    return ORJSONResponse(snapshot.model_dump(mode="json"))


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[SavedTrip],
    summary="List my trips",
)
async def list_trips(principal: PrincipalDep, store: StoreDep) -> ORJSONResponse:
    trips = await store.get_trips(principal.uid)
    return ORJSONResponse([trip.model_dump(mode="json") for trip in trips])


@router.get(
    "/shared",
    response_class=ORJSONResponse,
    response_model=SessionSnapshot,
    summary="Open a shared trip link",
)
async def open_shared_trip(
    session: SessionDep,
    trip_id: Annotated[str, Query(alias="tripId", min_length=1)],
) -> ORJSONResponse:
    if await session.load_shared(trip_id) is None:
        raise TripNotFoundError(trip_id=trip_id)
    return ORJSONResponse(session.snapshot().model_dump(mode="json"))


@router.get(
    "/{trip_id}",
    response_class=ORJSONResponse,
    response_model=SavedTrip,
    summary="Get a trip by id",
)
async def get_trip(trip_id: str, store: StoreDep) -> ORJSONResponse:
    trip = await _get_trip(store, trip_id)
    return ORJSONResponse(trip.model_dump(mode="json"))


@router.get(
    "/{trip_id}/export",
    response_class=PlainTextResponse,
    summary="Download a trip summary",
)
async def export_trip(trip_id: str, store: StoreDep) -> PlainTextResponse:
    """Plain-text itinerary, companies and budget as a file attachment."""
    trip = await _get_trip(store, trip_id)
    content = trip_summary(
        trip.itinerary,
        trip.companies,
        trip.budget,
        trip.form_data.traveler_count,
        trip_id=trip.id,
    )
    filename = download_filename(trip.itinerary.destination)
    return PlainTextResponse(
        content,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/{trip_id}/share",
    response_class=ORJSONResponse,
    response_model=SharePayload,
    summary="Get share sheet content for a trip",
)
async def share_trip(trip_id: str, store: StoreDep) -> ORJSONResponse:
    trip = await _get_trip(store, trip_id)
    payload = share_payload(
        trip.itinerary,
        trip.companies,
        trip.budget,
        trip.form_data.traveler_count,
        trip_id=trip.id,
    )
    return ORJSONResponse(payload.model_dump(mode="json", exclude_none=True))


@router.get(
    "/{trip_id}/copy",
    response_class=PlainTextResponse,
    summary="Get clipboard text for a trip",
)
async def copy_trip(trip_id: str, store: StoreDep) -> PlainTextResponse:
    """The share link of a saved trip, ready to paste."""
    trip = await _get_trip(store, trip_id)
    return PlainTextResponse(
        copy_text(
            trip.itinerary,
            trip.companies,
            trip.budget,
            trip.form_data.traveler_count,
            trip_id=trip.id,
        ),
    )


@router.get(
    "/{trip_id}/markers",
    response_class=ORJSONResponse,
    response_model=list[MapMarker],
    summary="Get map markers for a trip",
)
async def trip_markers(trip_id: str, store: StoreDep) -> ORJSONResponse:
    trip = await _get_trip(store, trip_id)
    markers = map_markers(trip.itinerary, trip.companies)
    return ORJSONResponse([marker.model_dump(mode="json") for marker in markers])


@router.get(
    "/{trip_id}/photos",
    response_class=ORJSONResponse,
    response_model=PhotoAlbum,
    summary="Get a trip's photo album",
)
async def trip_photos(
    trip_id: str,
    store: StoreDep,
    sort: Annotated[PhotoSort, Query()] = PhotoSort.DATE_DESC,
    location: Annotated[str | None, Query()] = None,
) -> ORJSONResponse:
    trip = await _get_trip(store, trip_id)
    album = PhotoAlbum(
        photos=sort_photos(filter_by_location(trip.photos, location), sort),
        locations=photo_locations(trip.photos),
    )
    return ORJSONResponse(album.model_dump(mode="json"))


@router.post(
    "/{trip_id}/photos",
    response_class=ORJSONResponse,
    response_model=PhotoAlbum,
    summary="Preview a trip's album with new photos",
)
async def add_trip_photos(
    trip_id: str,
    add_req: AddPhotosRequest,
    session: SessionDep,
    store: StoreDep,
) -> ORJSONResponse:
    """
    Add uploaded or camera photos to a trip's album.

    Photo edits belong to the caller's session: the returned album holds the
    new photos, but the saved trip is left unchanged.
    """
    session.select_trip(await _get_trip(store, trip_id))
    if add_req.source == "camera":
        for url in add_req.urls:
            session.capture_photo(url, add_req.location)
    else:
        session.upload_photos(add_req.urls)

    album = PhotoAlbum(photos=session.photos, locations=photo_locations(session.photos))
    return ORJSONResponse(album.model_dump(mode="json"))
