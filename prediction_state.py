"""Lifecycle of the one prediction request the dashboard allows at a time."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from medal_api import MedalApiError, Prediction

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Prediction failed"


class SlotStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PredictionSlot:
    status: SlotStatus = SlotStatus.IDLE
    result: Optional[Prediction] = None
    error: str = ""

    @property
    def is_busy(self) -> bool:
        return self.status is SlotStatus.PENDING

    def begin(self) -> bool:
        """Claim the slot. Returns False if a request is already in flight."""
        if self.is_busy:
            return False
        self.status = SlotStatus.PENDING
        self.result = None
        self.error = ""
        return True

    def succeed(self, prediction: Prediction):
        if not self.is_busy:
            raise RuntimeError(f"cannot resolve a {self.status.value} slot")
        self.status = SlotStatus.SUCCEEDED
        self.result = prediction

    def fail(self, message: str):
        if not self.is_busy:
            raise RuntimeError(f"cannot resolve a {self.status.value} slot")
        self.status = SlotStatus.FAILED
        self.error = message or DEFAULT_ERROR

    def run(self, request_fn) -> bool:
        """Begin, call ``request_fn()`` and resolve with its outcome.

        Returns False without calling anything when the slot is busy.
        """
        if not self.begin():
            logger.info("Prediction already pending; ignoring new request")
            return False
        try:
            prediction = request_fn()
        except MedalApiError as e:
            self.fail(str(e))
        except Exception:
            self.fail(DEFAULT_ERROR)
            raise
        else:
            self.succeed(prediction)
        return True
