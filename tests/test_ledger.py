"""
Tests for overlap detection and the commit path of the booking ledger.
"""

from __future__ import annotations

import threading

import pytest

from consult_booking.application.exceptions import (
    PersistenceFailure,
    SlotNoLongerAvailable,
    ValidationError,
)
from consult_booking.application.use_cases.ledger import BookingLedger
from consult_booking.domain.entities.booking import BookedSlot, Booking, BookingRequest
from consult_booking.infrastructure.store.memory_store import MemoryBookingStore


class CountingStore(MemoryBookingStore):
    def __init__(self, bookings=None) -> None:
        super().__init__(bookings)
        self.loads = 0
        self.saves = 0

    def load(self):
        self.loads += 1
        return super().load()

    def save_all(self, bookings):
        self.saves += 1
        super().save_all(bookings)


class BrokenReadStore(MemoryBookingStore):
    def load(self):
        raise PersistenceFailure("corrupt")


class BrokenWriteStore(MemoryBookingStore):
    def save_all(self, bookings):
        raise PersistenceFailure("disk full")


def _booking(date: str = "2025-06-10", time: str = "13:00", duration: int = 30, booking_id: str = "b1") -> Booking:
    return Booking(
        id=booking_id,
        name="Ada",
        email="ada@example.com",
        date=date,
        time=time,
        duration=duration,
        created_at="2025-06-01T10:00:00",
    )


def _request(date: str = "2025-06-10", time: str = "13:00", duration: int = 30, **overrides) -> BookingRequest:
    fields = {"name": "Grace", "email": "grace@example.com", "notes": "Intro call"}
    fields.update(overrides)
    return BookingRequest(date=date, time=time, duration=duration, **fields)


def test_overlap_scenario_around_existing_booking():
    """Existing 13:00-13:30 booking: same slot and straddling slot overlap, abutting slot does not."""
    ledger = BookingLedger(MemoryBookingStore([_booking()]))

    assert ledger.is_overlapping("2025-06-10", "13:00", 30) is True
    assert ledger.is_overlapping("2025-06-10", "13:30", 30) is False
    assert ledger.is_overlapping("2025-06-10", "12:45", 30) is True


def test_slot_ending_when_booking_starts_is_free():
    ledger = BookingLedger(MemoryBookingStore([_booking()]))

    assert ledger.is_overlapping("2025-06-10", "12:30", 30) is False


def test_candidate_enclosing_a_booking_overlaps():
    ledger = BookingLedger(MemoryBookingStore([_booking(time="13:10", duration=10)]))

    assert ledger.is_overlapping("2025-06-10", "13:00", 30) is True


def test_bookings_on_other_dates_are_ignored():
    ledger = BookingLedger(MemoryBookingStore([_booking(date="2025-06-09", time="12:00", duration=24 * 60)]))

    assert ledger.is_overlapping("2025-06-10", "13:00", 30) is False


def test_is_overlapping_does_not_write():
    store = CountingStore([_booking()])
    ledger = BookingLedger(store)

    ledger.is_overlapping("2025-06-10", "13:00", 30)

    assert store.saves == 0


def test_commit_round_trip():
    """Committed booking is listed exactly once with the input fields plus id and created_at."""
    ledger = BookingLedger(MemoryBookingStore())

    booking = ledger.commit(_request())
    listed = ledger.list_bookings()

    assert listed == [booking]
    assert booking.id
    assert booking.created_at
    assert (booking.name, booking.email, booking.notes) == ("Grace", "grace@example.com", "Intro call")
    assert (booking.date, booking.time, booking.duration) == ("2025-06-10", "13:00", 30)


def test_second_commit_for_same_slot_is_rejected():
    store = MemoryBookingStore()
    ledger = BookingLedger(store)

    ledger.commit(_request())
    with pytest.raises(SlotNoLongerAvailable):
        ledger.commit(_request(name="Linus", email="linus@example.com"))

    assert len(store.load()) == 1


def test_abutting_commits_both_succeed():
    ledger = BookingLedger(MemoryBookingStore())

    ledger.commit(_request(time="13:00"))
    ledger.commit(_request(time="13:30"))

    assert [b.time for b in ledger.list_bookings()] == ["13:00", "13:30"]


def test_ids_are_unique():
    ledger = BookingLedger(MemoryBookingStore())

    ids = {ledger.commit(_request(time=t)).id for t in ("12:00", "12:30", "13:00", "13:30")}

    assert len(ids) == 4


def test_zero_duration_fails_before_touching_store():
    store = CountingStore()
    ledger = BookingLedger(store)

    with pytest.raises(ValidationError):
        ledger.commit(_request(duration=0))

    assert store.loads == 0
    assert store.saves == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"email": "not-an-email"},
        {"email": "a b@example.com"},
        {"email": ""},
        {"time": "25:99"},
        {"date": "10/06/2025"},
        {"date": "2025-6-10"},
        {"time": "9:05"},
        {"time": "13:5"},
    ],
)
def test_invalid_input_is_rejected(overrides):
    store = CountingStore()
    ledger = BookingLedger(store)

    with pytest.raises(ValidationError):
        ledger.commit(_request(**overrides))

    assert store.saves == 0


def test_list_bookings_degrades_to_empty_on_read_failure():
    ledger = BookingLedger(BrokenReadStore())

    assert ledger.list_bookings() == []
    assert ledger.is_overlapping("2025-06-10", "13:00", 30) is False


def test_commit_refuses_to_write_over_unreadable_store():
    with pytest.raises(PersistenceFailure):
        BookingLedger(BrokenReadStore()).commit(_request())


def test_write_failure_leaves_store_unchanged():
    store = BrokenWriteStore([_booking()])
    ledger = BookingLedger(store)

    with pytest.raises(PersistenceFailure):
        ledger.commit(_request(time="15:00"))

    assert store.load() == [_booking()]


def test_booked_slots_for_a_date():
    ledger = BookingLedger(
        MemoryBookingStore([_booking(), _booking(time="15:00", duration=60, booking_id="b2"), _booking(date="2025-06-11")])
    )

    assert ledger.booked_slots("2025-06-10") == [BookedSlot("13:00", 30), BookedSlot("15:00", 60)]


def test_concurrent_commits_for_one_slot_admit_a_single_booking():
    store = MemoryBookingStore()
    ledger = BookingLedger(store)
    results: list[str] = []
    barrier = threading.Barrier(8)

    def attempt(i: int) -> None:
        barrier.wait()
        try:
            ledger.commit(_request(email=f"user{i}@example.com"))
            results.append("ok")
        except SlotNoLongerAvailable:
            results.append("taken")

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("taken") == 7
    assert len(store.load()) == 1


def test_cleared_store_frees_every_slot():
    store = MemoryBookingStore([_booking()])
    ledger = BookingLedger(store)

    store.clear()

    assert ledger.list_bookings() == []
    assert ledger.is_overlapping("2025-06-10", "13:00", 30) is False


def test_unpadded_date_cannot_double_book_a_slot():
    store = MemoryBookingStore()
    ledger = BookingLedger(store)
    ledger.commit(_request())

    with pytest.raises(ValidationError):
        ledger.commit(_request(date="2025-6-10"))

    assert len(store.load()) == 1
    assert ledger.is_overlapping("2025-6-10", "13:00", 30) is True


def test_committed_booking_keeps_padded_date_and_time():
    booking = BookingLedger(MemoryBookingStore()).commit(_request(date="2025-01-05", time="12:30"))

    assert booking.date == "2025-01-05"
    assert booking.time == "12:30"


def test_stored_unpadded_record_still_blocks_its_slot():
    ledger = BookingLedger(MemoryBookingStore([_booking(date="2025-6-10", time="13:00")]))

    assert ledger.is_overlapping("2025-06-10", "13:15", 30) is True
    assert ledger.booked_slots("2025-06-10") == [BookedSlot("13:00", 30)]
    with pytest.raises(SlotNoLongerAvailable):
        ledger.commit(_request())
