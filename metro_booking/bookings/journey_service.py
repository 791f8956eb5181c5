from typing import List, Optional
from datetime import datetime, time
import logging

from metro_booking.config import Settings, settings
from metro_booking.exceptions import (
    IncompleteItinerary, InvalidSelection, NoOffersForLeg, NoRouteFound,
    OutsideOperatingHours
)
from metro_booking.routes.fare_service import FareCalculationService
from metro_booking.routes.schemas import FareQuote, Leg, PassengerCounts, PathResult, StationKey
from metro_booking.routes.service import RouteService
from metro_booking.schedules.schemas import TrainOffer
from metro_booking.schedules.service import (
    MINUTES_PER_DAY, TimetableGenerator, from_minutes, to_minutes
)
from metro_booking.bookings.schemas import (
    BookingValidation, ItineraryState, ItinerarySummary, LegOffers, LegSummary,
    TransferPolicy, TransferSummary
)

logger = logging.getLogger(__name__)


class ItineraryBuilder:
    """Selection state machine over the legs of a route.

    Each leg is either unselected or holds one offer from its current offer
    set. Selecting leg ``i`` drops every later selection and regenerates leg
    ``i + 1`` from the chosen arrival plus the minimum transfer time.
    """

    def __init__(
        self,
        path: PathResult,
        legs: List[Leg],
        timetable: TimetableGenerator,
        min_transfer_minutes: int,
        now: Optional[time] = None,
    ):
        self.path = path
        self.legs = legs
        self.timetable = timetable
        self.min_transfer_minutes = min_transfer_minutes
        self.now = now

        self._offers: List[List[TrainOffer]] = [[] for _ in legs]
        self._generated: List[bool] = [False] * len(legs)
        self._selections: List[Optional[TrainOffer]] = [None] * len(legs)

    def _check_leg(self, leg_index: int):
        if not 0 <= leg_index < len(self.legs):
            raise InvalidSelection(f"Leg {leg_index} is not part of this route")

    def _clear_from(self, leg_index: int):
        """Drop selections from ``leg_index`` on and offers after it"""
        for j in range(leg_index, len(self.legs)):
            self._selections[j] = None
            if j > leg_index:
                self._offers[j] = []
                self._generated[j] = False

    def offers(self, leg_index: int) -> List[TrainOffer]:
        self._check_leg(leg_index)
        return list(self._offers[leg_index])

    def selection(self, leg_index: int) -> Optional[TrainOffer]:
        self._check_leg(leg_index)
        return self._selections[leg_index]

    def generate_leg_offers(
        self, leg_index: int, baseline: time, now: Optional[time] = None
    ) -> List[TrainOffer]:
        """Regenerate the offers of a leg; this leg and later ones become unselected.

        ``now`` applies to this generation only; the session clock is used otherwise.
        """
        self._check_leg(leg_index)
        self._clear_from(leg_index)

        leg = self.legs[leg_index]
        offers = self.timetable.offers(
            baseline, leg.travel_minutes, now if now is not None else self.now
        )
        self._offers[leg_index] = offers
        self._generated[leg_index] = True

        logger.debug(
            "Leg %d %s-%s from %s: %d offers",
            leg_index, leg.origin.name, leg.destination.name,
            baseline.strftime("%H:%M"), len(offers),
        )
        return list(offers)

    def select_offer(self, leg_index: int, offer: TrainOffer) -> ItineraryState:
        self._check_leg(leg_index)
        if offer not in self._offers[leg_index]:
            raise InvalidSelection(
                f"Train {offer.departure:%H:%M}-{offer.arrival:%H:%M} is not "
                f"available for leg {leg_index}"
            )

        self._clear_from(leg_index)
        self._selections[leg_index] = offer

        next_leg = leg_index + 1
        if next_leg < len(self.legs):
            baseline = to_minutes(offer.arrival) + self.min_transfer_minutes
            if baseline < MINUTES_PER_DAY:
                self.generate_leg_offers(next_leg, from_minutes(baseline))
            else:
                # no service past midnight
                self._generated[next_leg] = True

        return self.state()

    def auto_select_earliest(self) -> ItineraryState:
        """Select the earliest offer on every unselected leg, in order"""
        for i in range(len(self.legs)):
            if self._selections[i] is not None:
                continue
            if not self._offers[i]:
                break
            self.select_offer(i, self._offers[i][0])
        return self.state()

    def is_complete(self) -> bool:
        return bool(self.legs) and all(s is not None for s in self._selections)

    def transfer_time(self, leg_index: int) -> Optional[int]:
        """Minutes between the previous leg's arrival and this leg's departure"""
        self._check_leg(leg_index)
        if leg_index == 0:
            return None
        previous = self._selections[leg_index - 1]
        current = self._selections[leg_index]
        if previous is None or current is None:
            return None
        return to_minutes(current.departure) - to_minutes(previous.arrival)

    def transfer_warnings(self) -> List[int]:
        """Leg indices whose incoming transfer is below the minimum"""
        warnings = []
        for i in range(1, len(self.legs)):
            wait = self.transfer_time(i)
            if wait is not None and wait < self.min_transfer_minutes:
                warnings.append(i)
        return warnings

    def unavailable_legs(self) -> List[int]:
        return [
            i for i in range(len(self.legs))
            if self._generated[i] and not self._offers[i]
        ]

    def state(self) -> ItineraryState:
        return ItineraryState(
            path=self.path,
            legs=[
                LegOffers(leg=leg, offers=list(self._offers[i]), selected=self._selections[i])
                for i, leg in enumerate(self.legs)
            ],
            is_complete=self.is_complete(),
            transfer_warnings=self.transfer_warnings(),
            unavailable_legs=self.unavailable_legs(),
        )

    def render_summary(self) -> ItinerarySummary:
        """Projection of the selected legs, up to the first unselected one"""
        legs: List[LegSummary] = []
        transfers: List[TransferSummary] = []

        for i, leg in enumerate(self.legs):
            selected = self._selections[i]
            if selected is None:
                break
            if i > 0:
                wait = self.transfer_time(i)
                transfers.append(TransferSummary(
                    at_station=leg.origin.name,
                    wait_min=wait,
                    tight=wait < self.min_transfer_minutes,
                ))
            legs.append(LegSummary(
                from_station=leg.origin.name,
                to_station=leg.destination.name,
                depart=selected.departure,
                arrive=selected.arrival,
                duration_min=selected.duration_minutes,
            ))

        total = sum(leg.duration_min for leg in legs) + sum(t.wait_min for t in transfers)
        return ItinerarySummary(legs=legs, transfers=transfers, total_minutes=total)

    def validate_for_booking(self, policy: TransferPolicy) -> BookingValidation:
        """Check the selection can be confirmed under a transfer policy"""
        errors = []
        warnings = []

        missing = [i for i, s in enumerate(self._selections) if s is None]
        if missing or not self.legs:
            errors.append(
                "Please select a train for every segment "
                f"(missing: {', '.join(str(i) for i in missing)})"
            )

        tight = self.transfer_warnings()
        for i in tight:
            station = self.legs[i].origin.name
            wait = self.transfer_time(i)
            if wait < 0:
                errors.append(
                    f"Train at station {station} departs {-wait} minutes before "
                    "the previous train arrives"
                )
                continue
            message = (
                f"Transfer at station {station} is {wait} minutes; "
                f"minimum transfer time is {self.min_transfer_minutes} minutes"
            )
            if policy == TransferPolicy.STRICT:
                errors.append(message)
            else:
                warnings.append(message)

        return BookingValidation(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            tight_transfers=tight,
        )


class JourneyPlanningService:
    """One booking session: route, train selection and fare for a single journey.

    Expected business conditions (no route, no trains on a leg) are raised
    here as booking errors; selections made before the failure are kept.
    """

    def __init__(
        self,
        route_service: Optional[RouteService] = None,
        config: Settings = settings,
    ):
        self.config = config
        self.route_service = route_service or RouteService(config=config)
        self.timetable = TimetableGenerator(config)
        self.fare_service = FareCalculationService(config)
        self.builder: Optional[ItineraryBuilder] = None
        self.created_at = datetime.now()

    def _require_builder(self) -> ItineraryBuilder:
        if self.builder is None:
            raise RuntimeError("plan_journey() must be called before working with trains")
        return self.builder

    def _raise_if_unavailable(self, state: ItineraryState):
        if state.unavailable_legs:
            leg_index = state.unavailable_legs[0]
            leg = self.builder.legs[leg_index]
            raise NoOffersForLeg(
                f"No available trains found for segment "
                f"{leg.origin.name} to {leg.destination.name}",
                leg_index=leg_index,
            )

    def compute_route(self, origin: StationKey, destination: StationKey) -> PathResult:
        return self.route_service.compute_route(origin, destination)

    def plan_journey(
        self,
        origin: StationKey,
        destination: StationKey,
        desired_time: time,
        now: Optional[time] = None,
    ) -> ItineraryState:
        """Route the journey and generate offers for its first leg"""
        if desired_time < self.config.FIRST_TRAIN or desired_time > self.config.LAST_TRAIN:
            raise OutsideOperatingHours(
                f"Trains operate only between {self.config.FIRST_TRAIN:%H:%M} "
                f"and {self.config.LAST_TRAIN:%H:%M}."
            )

        path = self.compute_route(origin, destination)
        if path.is_empty:
            raise NoRouteFound("No route available between selected stations.")

        legs = self.route_service.legs_for(path)
        self.builder = ItineraryBuilder(
            path, legs, self.timetable, self.config.MIN_TRANSFER_MINUTES, now=now
        )
        self.builder.generate_leg_offers(0, desired_time)
        logger.info(
            "Planned journey %s with %d legs from %s",
            "-".join(s.name for s in path.stations), len(legs), desired_time.strftime("%H:%M"),
        )

        state = self.builder.state()
        self._raise_if_unavailable(state)
        return state

    def generate_leg_offers(
        self, leg_index: int, baseline: time, now: Optional[time] = None
    ) -> List[TrainOffer]:
        builder = self._require_builder()
        offers = builder.generate_leg_offers(leg_index, baseline, now)
        self._raise_if_unavailable(builder.state())
        return offers

    def select_offer(self, leg_index: int, offer: TrainOffer) -> ItineraryState:
        state = self._require_builder().select_offer(leg_index, offer)
        self._raise_if_unavailable(state)
        return state

    def auto_select_earliest(self) -> ItineraryState:
        state = self._require_builder().auto_select_earliest()
        self._raise_if_unavailable(state)
        return state

    def state(self) -> ItineraryState:
        return self._require_builder().state()

    def is_selection_complete(self) -> bool:
        return self._require_builder().is_complete()

    def transfer_warnings(self) -> List[int]:
        return self._require_builder().transfer_warnings()

    def render_summary(self) -> ItinerarySummary:
        return self._require_builder().render_summary()

    def quote_fare(
        self,
        counts: PassengerCounts,
        is_round_trip: bool = False,
        reference_time: Optional[time] = None,
    ) -> FareQuote:
        """Price the selected itinerary.

        The peak surcharge is decided by ``reference_time``, defaulting to
        the departure of the first leg.
        """
        builder = self._require_builder()
        if not builder.is_complete():
            raise IncompleteItinerary("Please select a train for every segment")

        if reference_time is None:
            reference_time = builder.selection(0).departure

        return self.fare_service.quote(
            builder.path.total_distance,
            counts,
            is_peak=self.fare_service.is_peak(reference_time),
            is_round_trip=is_round_trip,
        )

    def confirm(self, policy: Optional[TransferPolicy] = None) -> BookingValidation:
        if policy is None:
            policy = TransferPolicy(self.config.TRANSFER_POLICY)
        validation = self._require_builder().validate_for_booking(policy)
        if not validation.is_valid:
            logger.info("Booking rejected: %s", "; ".join(validation.errors))
        return validation
