from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Response

from consult_booking.api.v1.schemas import (
    BookingCreatedSchema,
    BookingRequestSchema,
    BookingSchema,
    CalendarLinksSchema,
    CalendarMonthSchema,
    DispatchResultsSchema,
    EmailResultSchema,
    SendEmailsRequestSchema,
    SendEmailsResponseSchema,
    SlotSchema,
    SlotsResponseSchema,
)
from consult_booking.application.exceptions import (
    DispatchFailure,
    PersistenceFailure,
    SlotNoLongerAvailable,
    ValidationError,
)
from consult_booking.application.ports.notifier import NotificationPort
from consult_booking.application.use_cases.ledger import BookingLedger
from consult_booking.application.use_cases.scheduling import SchedulingService
from consult_booking.application.utils.time_utils import add_months
from consult_booking.domain.entities.booking import Booking, BookingRequest
from consult_booking.infrastructure.calendar.ics import generate_ics_event, ics_filename
from consult_booking.infrastructure.calendar.links import generate_calendar_urls
from consult_booking.wiring.dependencies import get_ledger, get_notifier, get_scheduling_service


router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "Sorry, that time has just been booked. Please choose another slot."


def _booking_schema(booking: Booking) -> BookingSchema:
    return BookingSchema(
        id=booking.id,
        name=booking.name,
        email=booking.email,
        notes=booking.notes,
        date=booking.date,
        time=booking.time,
        duration=booking.duration,
        createdAt=booking.created_at,
    )


def _to_request(payload: BookingRequestSchema) -> BookingRequest:
    return BookingRequest(
        name=payload.name,
        email=payload.email,
        date=payload.date,
        time=payload.time,
        duration=payload.duration,
        notes=payload.notes,
    )


@router.get("/dates", response_model=CalendarMonthSchema)
def bookable_dates(
    month: str | None = Query(None, description="YYYY-MM, defaults to the current month"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    today = date.today()
    try:
        reference = datetime.strptime(month, "%Y-%m").date() if month else today
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid month: {month!r}")

    calendar_month = service.calendar_month(reference, today)
    previous = None
    if calendar_month.can_go_previous:
        previous = _month_key(add_months(calendar_month.month, -1))
    return CalendarMonthSchema(
        month=_month_key(calendar_month.month),
        dates=calendar_month.dates,
        can_go_previous=calendar_month.can_go_previous,
        can_go_next=calendar_month.can_go_next,
        previous_month=previous,
        next_month=_month_key(add_months(calendar_month.month, 1)),
    )


@router.get("/slots", response_model=SlotsResponseSchema)
def slots(
    date: str = Query(..., description="YYYY-MM-DD"),
    duration: int = Query(30, description="Minutes"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    try:
        candidates = service.available_slots(date, duration)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SlotsResponseSchema(
        date=date,
        duration=duration,
        slots=[SlotSchema(time=s.time, available=s.available) for s in candidates],
        available_count=sum(1 for s in candidates if s.available),
        total_count=len(candidates),
    )


@router.get("/bookings", response_model=list[BookingSchema])
def list_bookings(ledger: BookingLedger = Depends(get_ledger)):
    return [_booking_schema(b) for b in ledger.list_bookings()]


@router.post("/bookings", response_model=BookingCreatedSchema, status_code=201)
def create_booking(
    req: BookingRequestSchema,
    background_tasks: BackgroundTasks,
    service: SchedulingService = Depends(get_scheduling_service),
):
    try:
        booking = service.book(_to_request(req), schedule=background_tasks.add_task)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SlotNoLongerAvailable:
        raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE)
    except PersistenceFailure as e:
        logger.error("Failed to save booking", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail="Failed to save booking. Please try again.")

    links = generate_calendar_urls(booking)
    return BookingCreatedSchema(
        booking=_booking_schema(booking),
        calendar_links=CalendarLinksSchema(google=links.google, outlook=links.outlook, yahoo=links.yahoo),
    )


@router.get("/bookings/{booking_id}/invite.ics")
def booking_invite(booking_id: str, ledger: BookingLedger = Depends(get_ledger)) -> Response:
    booking = next((b for b in ledger.list_bookings() if b.id == booking_id), None)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    content = generate_ics_event(booking)
    if not content:
        raise HTTPException(status_code=500, detail="Failed to generate calendar invite")

    return Response(
        content=content,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{ics_filename(booking)}"'},
    )


@router.post("/send-booking-emails", response_model=SendEmailsResponseSchema)
def send_booking_emails(
    req: SendEmailsRequestSchema,
    notifier: NotificationPort = Depends(get_notifier),
):
    data = req.bookingData
    if not data.name or not data.email or not data.date or not data.time:
        raise HTTPException(status_code=400, detail="Missing required booking data")

    try:
        report = notifier.send_booking_emails(_to_request(data))
    except DispatchFailure as e:
        logger.error("Error sending booking emails", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(
        "Email sending results",
        extra={"reason": f"customer={report.customer.success} admin={report.admin.success}"},
    )
    return SendEmailsResponseSchema(
        success=report.success,
        message="Emails processed" if report.success else "Failed to send emails",
        results=DispatchResultsSchema(
            customer=EmailResultSchema(**asdict(report.customer)),
            admin=EmailResultSchema(**asdict(report.admin)),
        ),
    )


def _month_key(value: date) -> str:
    return value.strftime("%Y-%m")
