from datetime import date
from uuid import UUID


class SlotGenerationError(RuntimeError):
    pass


class ShiftNotFoundError(SlotGenerationError):
    def __init__(self, shift_id: UUID):
        super().__init__(f"Shift not found: {shift_id}")
        self.shift_id = shift_id


class InvalidDateRangeError(SlotGenerationError):
    def __init__(self, start_date: date, end_date: date):
        super().__init__(f"end_date {end_date} must be >= start_date {start_date}")
        self.start_date = start_date
        self.end_date = end_date
