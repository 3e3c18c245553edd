from datetime import date

from pydantic import BaseModel, Field


class BookingRequestSchema(BaseModel):
    name: str
    email: str
    date: str = Field(description="YYYY-MM-DD")
    time: str = Field(description="HH:MM, 24-hour")
    duration: int = Field(description="Minutes")
    notes: str | None = None


class BookingSchema(BaseModel):
    id: str
    name: str
    email: str
    notes: str | None = None
    date: str
    time: str
    duration: int
    createdAt: str


class CalendarLinksSchema(BaseModel):
    google: str
    outlook: str
    yahoo: str


class BookingCreatedSchema(BaseModel):
    booking: BookingSchema
    calendar_links: CalendarLinksSchema


class SlotSchema(BaseModel):
    time: str
    available: bool


class SlotsResponseSchema(BaseModel):
    date: str
    duration: int
    slots: list[SlotSchema]
    available_count: int
    total_count: int


class CalendarMonthSchema(BaseModel):
    month: str = Field(description="YYYY-MM")
    dates: list[date]
    can_go_previous: bool
    can_go_next: bool
    previous_month: str | None = None
    next_month: str


class EmailResultSchema(BaseModel):
    success: bool
    message: str
    error: str | None = None


class DispatchResultsSchema(BaseModel):
    customer: EmailResultSchema
    admin: EmailResultSchema


class SendEmailsRequestSchema(BaseModel):
    bookingData: BookingRequestSchema


class SendEmailsResponseSchema(BaseModel):
    success: bool
    message: str
    results: DispatchResultsSchema | None = None
