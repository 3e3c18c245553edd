from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from consult_booking.application.exceptions import PersistenceFailure
from consult_booking.application.ports.booking_store import BookingStorePort
from consult_booking.domain.entities.booking import Booking
from consult_booking.infrastructure.store.serialization import deserialize_booking, serialize_booking


class JsonBookingStore(BookingStorePort):
    """Whole booking collection stored as one JSON array in `<data_dir>/<key>.json`."""

    def __init__(self, data_dir: str = "./data", key: str = "qaxp-bookings") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._key = key
        self._logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self._data_dir / f"{self._key}.json"

    def load(self) -> list[Booking]:
        """Load bookings from the JSON file, [] if it does not exist yet."""
        file_path = self.path
        if not file_path.exists():
            return []

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (ValueError, OSError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise PersistenceFailure(f"Failed to read {file_path}: {e}") from e

        if not isinstance(raw, list):
            raise PersistenceFailure(f"Expected a list of bookings in {file_path}")

        try:
            return [deserialize_booking(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceFailure(f"Malformed booking record in {file_path}: {e}") from e

    def save_all(self, bookings: Iterable[Booking]) -> None:
        """Write the full collection atomically."""
        data = [serialize_booking(b) for b in bookings]
        self._write(data)
        self._logger.debug("Bookings saved", extra={"count": len(data)})

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceFailure(f"Failed to clear {self.path}: {e}") from e

    def _write(self, data: list[dict[str, Any]]) -> None:
        file_path = self.path
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            # Write to temp file
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            # Atomic rename
            temp_path.replace(file_path)
        except (OSError, TypeError, ValueError) as e:
            # Clean up temp file on error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass
            raise PersistenceFailure(f"Failed to write {file_path}: {e}") from e
