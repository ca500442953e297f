# app/services/session.py

"""
Trip session controller.

A ``TripSession`` holds the state of one planning session (the current
view, the submitted form, the generated content, the saved-trip list) and
drives the planner and the trip store through it. It is the outer error
boundary: planner failures that escape every fallback and store failures
during auto-save stop here.
"""

from logging import getLogger

from app.configs.settings import PLAN_GENERATION_ERROR, TRIP_NOT_FOUND_ERROR, settings
from app.errors import AuthRequiredError, PlanningError
from app.schemas.trip import (
    BudgetBreakdown,
    CompanyInfo,
    ItineraryResult,
    PhotoItem,
    Principal,
    SavedTrip,
    SessionSnapshot,
    SessionView,
    TripRequest,
)
from app.services.export import share_link
from app.services.photos import camera_photo, upload_photo
from app.services.planner import TripPlanner
from app.services.storage.base import TripStore, Unsubscribe
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class TripSession:
    """
    State machine for one user's planning session.

    Views move ``landing -> form -> loading -> results``; ``myTrips`` is
    reachable whenever a principal is signed in.
    """

    def __init__(
        self,
        planner: TripPlanner,
        store: TripStore,
        principal: Principal | None = None,
        base_url: str | None = None,
    ) -> None:
        self.planner = planner
        self.store = store
        self.user = principal
        self.base_url = base_url or settings.PUBLIC_BASE_URL

        self.view = SessionView.LANDING
        self.form_data: TripRequest | None = None
        self.itinerary: ItineraryResult | None = None
        self.companies: list[CompanyInfo] = []
        self.budget: BudgetBreakdown | None = None
        self.photos: list[PhotoItem] = []
        self.current_trip_id: str | None = None
        self.saved_trips: list[SavedTrip] = []
        self.notice: str | None = None
        self.degraded: list[str] = []
        self.quota_exceeded = False

    # --- Auth ---

    def watch_auth(self) -> Unsubscribe:
        """Follow the store's sign-in state until the returned function is called."""
        return self.store.on_auth_change(self._on_auth_change)

    def _on_auth_change(self, principal: Principal | None) -> None:
        self.user = principal
        if principal is None:
            self.saved_trips = []

    async def sign_in(self, credential: str | None = None) -> Principal:
        self.user = await self.store.sign_in(credential)
        await self.refresh_trips()
        return self.user

    async def sign_out(self) -> None:
        await self.store.sign_out()
        self.user = None
        self.saved_trips = []
        self.view = SessionView.LANDING

    async def refresh_trips(self) -> list[SavedTrip]:
        """Reload the signed-in principal's trips; failures keep the previous list."""
        if self.user is None:
            self.saved_trips = []
            return self.saved_trips
        try:
            self.saved_trips = await self.store.get_trips(self.user.uid)
        except Exception:
            logger.exception(f"Error fetching trips for {self.user.uid}")
        return self.saved_trips

    # --- Navigation ---

    def start(self) -> None:
        self.notice = None
        self.view = SessionView.FORM

    async def show_my_trips(self) -> list[SavedTrip]:
        if self.user is None:
            raise AuthRequiredError
        await self.refresh_trips()
        self.view = SessionView.MY_TRIPS
        return self.saved_trips

    def back(self) -> None:
        match self.view:
            case SessionView.RESULTS:
                self.view = SessionView.MY_TRIPS if self.user else SessionView.FORM
            case SessionView.FORM | SessionView.MY_TRIPS:
                self.view = SessionView.LANDING
            case _:
                pass

    def reset(self) -> None:
        """Discard the current trip and return to an empty form."""
        self._clear_trip()
        self.view = SessionView.FORM

    def _clear_trip(self) -> None:
        self.form_data = None
        self.itinerary = None
        self.companies = []
        self.budget = None
        self.photos = []
        self.current_trip_id = None
        self.degraded = []
        self.quota_exceeded = False

    # --- Planning ---

    async def submit(self, request: TripRequest) -> SessionSnapshot:
        """
        Generate a plan for ``request`` and, when signed in, save it.

        Raises:
            PlanningError: Generation failed outside every fallback; the
                session is back on the form with the failure notice set.
        """
        self.form_data = request
        self.current_trip_id = None
        self.notice = None
        self.view = SessionView.LOADING

        try:
            plan = await self.planner.generate_plan(request)
        except Exception as e:
            logger.exception(f"Error generating trip for {request.destination}")
            self.notice = PLAN_GENERATION_ERROR
            self.view = SessionView.FORM
            raise PlanningError(self.notice) from e

        self.itinerary = plan.itinerary
        self.companies = plan.companies
        self.budget = plan.budget
        self.photos = plan.photos
        self.degraded = plan.degraded
        self.quota_exceeded = plan.quota_exceeded

        if self.user is not None:
            await self._auto_save(request)

        self.view = SessionView.RESULTS
        return self.snapshot()

    async def _auto_save(self, request: TripRequest) -> None:
        if self.user is None or self.itinerary is None:
            return
        trip = SavedTrip(
            user_id=self.user.uid,
            destination=request.destination,
            form_data=request,
            itinerary=self.itinerary,
            companies=self.companies,
            budget=self.budget,
            photos=self.photos,
        )
        try:
            self.current_trip_id = await self.store.save_trip(trip)
        except Exception:
            logger.exception(f"Error saving trip for {self.user.uid}")
            return
        await self.refresh_trips()

    async def load_shared(self, trip_id: str) -> SavedTrip | None:
        """
        Open a trip from a share link.

        Returns:
            SavedTrip | None: The trip, or ``None`` when it could not be
                loaded; the session is then back on the landing view.
        """
        self.view = SessionView.LOADING
        try:
            trip = await self.store.get_trip_by_id(trip_id)
        except Exception:
            logger.exception(f"Failed to load shared trip {trip_id}")
            self._clear_trip()
            self.view = SessionView.LANDING
            return None

        if trip is None:
            logger.info(f"Shared trip {trip_id} not found")
            self._clear_trip()
            self.notice = TRIP_NOT_FOUND_ERROR
            self.view = SessionView.LANDING
            return None

        self.select_trip(trip)
        return trip

    def select_trip(self, trip: SavedTrip) -> None:
        self.form_data = trip.form_data
        self.itinerary = trip.itinerary
        self.companies = list(trip.companies)
        self.budget = trip.budget
        self.photos = list(trip.photos)
        self.current_trip_id = trip.id
        self.degraded = []
        self.quota_exceeded = False
        self.notice = None
        self.view = SessionView.RESULTS

    # --- Photos (session-local, never written back to the store) ---

    def add_photo(self, photo: PhotoItem) -> None:
        self.photos = [photo, *self.photos]

    def upload_photos(self, urls: list[str]) -> list[PhotoItem]:
        """Add uploaded images, tagged with the trip destination, newest first."""
        location = self.itinerary.destination if self.itinerary else ""
        added = [upload_photo(url, location, index) for index, url in enumerate(urls)]
        self.photos = [*reversed(added), *self.photos]
        return added

    def capture_photo(self, url: str, location: str | None = None) -> PhotoItem:
        photo = camera_photo(url, location)
        self.add_photo(photo)
        return photo

    def update_photo(self, photo: PhotoItem) -> None:
        self.photos = [photo if p.id == photo.id else p for p in self.photos]

    def remove_photo(self, photo_id: str) -> None:
        self.photos = [p for p in self.photos if p.id != photo_id]

    # --- Views ---

    @property
    def share_link(self) -> str | None:
        if not self.current_trip_id:
            return None
        return share_link(self.current_trip_id, self.base_url)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            view=self.view,
            form_data=self.form_data,
            itinerary=self.itinerary,
            companies=self.companies,
            budget=self.budget,
            photos=self.photos,
            current_trip_id=self.current_trip_id,
            share_link=self.share_link,
            notice=self.notice,
            degraded=self.degraded,
            quota_exceeded=self.quota_exceeded,
            user=self.user,
        )
