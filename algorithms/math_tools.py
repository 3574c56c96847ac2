from typing import Optional


class MathTools:
    """Provides the calculations behind workout statistics."""

    EPLEY_DIVISOR: float = 30.0
    DAY_KEY_LENGTH: int = 10

    @classmethod
    def epley_1rm(cls, weight: float, reps: float) -> float:
        """Return the estimated one-rep max using the Epley formula."""
        if reps < 0:
            raise ValueError("reps must be non-negative")
        return weight * (1 + reps / cls.EPLEY_DIVISOR)

    @staticmethod
    def set_volume(weight: Optional[float], reps: Optional[float]) -> float:
        """Return ``weight * reps`` when both are present and non-zero, else 0."""
        if not weight or not reps:
            return 0.0
        return weight * reps

    @classmethod
    def day_key(cls, date: str) -> str:
        """Calendar day of an ISO date or timestamp string."""
        return str(date)[: cls.DAY_KEY_LENGTH]
