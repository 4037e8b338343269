from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .sources.base import CandidateItem


class RejectionReason(str, Enum):
    ALREADY_EXISTS = "already_exists"
    NO_IMAGE = "no_image"
    TOO_SHORT = "too_short"


@dataclass(frozen=True)
class AdmissionDecision:
    accepted: bool
    reason: Optional[RejectionReason] = None

    @classmethod
    def accept(cls) -> "AdmissionDecision":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> "AdmissionDecision":
        return cls(accepted=False, reason=reason)


class AdmissionFilter:
    """Decides whether a candidate item is worth enriching."""

    def __init__(self, require_image: bool = False, min_content_length: int = 200):
        self.require_image = require_image
        self.min_content_length = min_content_length

    def evaluate(self, item: CandidateItem, already_exists: bool) -> AdmissionDecision:
        if already_exists:
            return AdmissionDecision.reject(RejectionReason.ALREADY_EXISTS)

        if self.require_image and not item.image_url:
            return AdmissionDecision.reject(RejectionReason.NO_IMAGE)

        if len(item.best_text) < self.min_content_length:
            return AdmissionDecision.reject(RejectionReason.TOO_SHORT)

        return AdmissionDecision.accept()
