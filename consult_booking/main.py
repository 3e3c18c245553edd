from fastapi import FastAPI

from consult_booking.api.bookings import router as bookings_router
from consult_booking.core.config import settings
from consult_booking.core.log import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Consultation Booking", version="1.0.0")

app.include_router(bookings_router, tags=["bookings"])


@app.get("/health")
@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
