from railcal.schemas.availability_schema import DateAvailability, SeatStatus
from railcal.schemas.selection_schema import DateSelection
from railcal.schemas.train_schema import OperationalStatus, TrainDetails

__all__ = [
    "DateAvailability", "SeatStatus", "DateSelection",
    "OperationalStatus", "TrainDetails",
]
