# app/services/photos.py

"""Trip photo album: creating, ordering and filtering photo items."""

from datetime import datetime
from enum import StrEnum

from app.schemas.trip import PhotoItem
from app.utils.helpers import epoch_ms, iso_now

UPLOAD_TAGS = ["Upload"]
CAMERA_TAGS = ["Geo-Tagged", "Camera"]
UNKNOWN_LOCATION = "Unknown Location"


class PhotoSort(StrEnum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    LOCATION = "location"


def upload_photo(url: str, location: str, index: int = 0) -> PhotoItem:
    """Wrap an uploaded image; uploads default to the trip destination."""
    return PhotoItem(
        id=f"upload-{epoch_ms()}-{index}",
        url=url,
        date=iso_now(),
        location=location,
        tags=list(UPLOAD_TAGS),
    )


def camera_photo(url: str, location: str | None = None) -> PhotoItem:
    return PhotoItem(
        id=f"cam-{epoch_ms()}",
        url=url,
        date=iso_now(),
        location=location or UNKNOWN_LOCATION,
        tags=list(CAMERA_TAGS),
    )


def _timestamp(photo: PhotoItem) -> float:
    try:
        return datetime.fromisoformat(photo.date).timestamp()
    except ValueError:
        return 0.0


def sort_photos(photos: list[PhotoItem], order: PhotoSort | str = PhotoSort.DATE_DESC) -> list[PhotoItem]:
    """Return a sorted copy; the input list is left untouched."""
    match PhotoSort(order):
        case PhotoSort.DATE_DESC:
            return sorted(photos, key=_timestamp, reverse=True)
        case PhotoSort.DATE_ASC:
            return sorted(photos, key=_timestamp)
        case PhotoSort.LOCATION:
            return sorted(photos, key=lambda p: p.location.casefold())


def filter_by_location(photos: list[PhotoItem], location: str | None) -> list[PhotoItem]:
    if not location:
        return list(photos)
    return [p for p in photos if p.location == location]


def photo_locations(photos: list[PhotoItem]) -> list[str]:
    return sorted({p.location for p in photos})
