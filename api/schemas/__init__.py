from .moon_times import DayReport, ErrorResponse
