"""Train offer generation"""

from datetime import time

import pytest

from metro_booking.config import Settings
from metro_booking.schedules.schemas import TrainOffer
from metro_booking.schedules.service import TimetableGenerator, from_minutes, to_minutes


@pytest.fixture
def generator() -> TimetableGenerator:
    """Default timetable: a train every 20 minutes, one hour search window"""
    return TimetableGenerator(Settings(
        STATION_DWELL_MINUTES=10,
        FIRST_TRAIN=time(6, 0),
        LAST_TRAIN=time(20, 0),
        TRAIN_INTERVAL_MINUTES=20,
        SEARCH_WINDOW_MINUTES=60,
        MAX_OFFERS=6,
    ))


def _times(offers):
    return [(o.departure.strftime("%H:%M"), o.arrival.strftime("%H:%M")) for o in offers]


class TestMinutes:
    def test_round_trip(self):
        assert to_minutes(time(9, 35)) == 575
        assert from_minutes(575) == time(9, 35)

    def test_seconds_round_up(self):
        assert to_minutes(time(9, 0, 30)) == 541

    def test_past_midnight_rejected(self):
        with pytest.raises(ValueError):
            from_minutes(24 * 60)


class TestTimetableGenerator:
    def test_scenario_first_offer(self, scenario_config):
        offers = TimetableGenerator(scenario_config).offers(time(9, 0), 20)
        assert offers[0] == TrainOffer(departure=time(9, 0), arrival=time(9, 30))

    def test_rounds_up_to_next_slot(self, generator):
        offers = generator.offers(time(9, 5), 20)
        assert _times(offers) == [("09:20", "09:50"), ("09:40", "10:10"), ("10:00", "10:30")]

    def test_rounding_rolls_over_the_hour(self, generator):
        offers = generator.offers(time(9, 45), 20)
        assert offers[0].departure == time(10, 0)

    def test_now_is_a_floor(self, generator):
        offers = generator.offers(time(8, 0), 20, now=time(9, 10))
        assert offers[0].departure == time(9, 20)
        assert all(o.departure >= time(9, 10) for o in offers)

    def test_now_before_baseline_is_ignored(self, generator):
        offers = generator.offers(time(9, 0), 20, now=time(7, 0))
        assert offers[0].departure == time(9, 0)

    def test_arrivals_not_after_last_train(self, generator):
        offers = generator.offers(time(19, 0), 20)
        assert _times(offers) == [("19:00", "19:30"), ("19:20", "19:50")]

    def test_no_slot_left_before_last_train(self, generator):
        assert generator.offers(time(19, 30), 20) == []

    def test_baseline_after_last_train(self, generator):
        assert generator.offers(time(20, 30), 5) == []

    def test_departures_not_before_first_train(self, generator):
        offers = generator.offers(time(5, 30), 10)
        assert [o.departure for o in offers] == [time(6, 0), time(6, 20)]

    def test_capped_and_ordered(self):
        generator = TimetableGenerator(Settings(
            TRAIN_INTERVAL_MINUTES=5, SEARCH_WINDOW_MINUTES=60, MAX_OFFERS=6,
        ))
        offers = generator.offers(time(12, 0), 10)
        assert len(offers) == 6
        departures = [o.departure for o in offers]
        assert departures == sorted(set(departures))

    def test_bounds_hold_across_the_day(self, generator):
        for hour in range(5, 21):
            for minute in (0, 7, 33, 59):
                baseline = time(hour, minute)
                for offer in generator.offers(baseline, 25, now=time(9, 15)):
                    assert to_minutes(offer.departure) >= max(to_minutes(baseline), 9 * 60 + 15)
                    assert offer.arrival <= time(20, 0)
                    assert offer.duration_minutes == 35

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            TimetableGenerator(Settings(TRAIN_INTERVAL_MINUTES=0))
