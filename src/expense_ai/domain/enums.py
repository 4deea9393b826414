from enum import Enum

class Period(Enum):
    """Bucket size used by the time-series view"""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @property
    def pandas_freq(self) -> str:
        """pandas Period frequency alias for this bucket size"""
        return {"day": "D", "month": "M", "year": "Y"}[self.value]
