#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP).

Usage:
  python3 scripts/book_local.py [--date YYYY-MM-DD] [--duration 30]

What it does:
- Lists the slots for a day with their availability against the configured store
- Books a slot through the same SchedulingService the API uses
- Prints the committed booking and the calendar links
"""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from consult_booking.application.exceptions import BookingError
from consult_booking.domain.entities.booking import BookingRequest
from consult_booking.infrastructure.calendar.links import generate_calendar_urls
from consult_booking.wiring.dependencies import get_scheduling_service


def _print_slots(service, day: str, duration: int) -> None:
    slots = service.available_slots(day, duration)
    free = sum(1 for s in slots if s.available)
    print(f"\n{day} ({duration} min) - {free} of {len(slots)} available")
    for s in slots:
        print(f"  {s.time}  {'free' if s.available else 'booked'}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Book a consultation locally")
    parser.add_argument("--date", default=date.today().isoformat())
    parser.add_argument("--duration", type=int, default=30)
    args = parser.parse_args()

    service = get_scheduling_service()
    day = args.date

    print("\nLocal Booking Harness")
    print("-" * 60)
    print("Commands: /slots, /date YYYY-MM-DD, /book HH:MM, /quit")
    print("-" * 60)

    try:
        _print_slots(service, day, args.duration)
    except BookingError as e:
        print(f"ERROR: {e}")

    while True:
        try:
            cmd = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not cmd:
            continue
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return

        try:
            if cmd == "/slots":
                _print_slots(service, day, args.duration)
            elif cmd.startswith("/date "):
                day = cmd.split(maxsplit=1)[1]
                _print_slots(service, day, args.duration)
            elif cmd.startswith("/book "):
                slot = cmd.split(maxsplit=1)[1]
                name = input("Name: ").strip()
                email = input("Email: ").strip()
                notes = input("Notes (optional): ").strip() or None
                booking = service.book(
                    BookingRequest(name=name, email=email, date=day, time=slot, duration=args.duration, notes=notes)
                )
                links = generate_calendar_urls(booking)
                print("\n--- Booked ---")
                print(f"id: {booking.id}")
                print(f"when: {booking.date} {booking.time} ({booking.duration} min)")
                print(f"google: {links.google}")
            else:
                print("Unknown command")
        except BookingError as e:
            print(f"ERROR ({type(e).__name__}): {e}")


if __name__ == "__main__":
    main()
