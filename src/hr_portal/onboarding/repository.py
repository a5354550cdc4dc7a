from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import OnboardingData


class SubmissionRepository(Protocol):
    def list_all(self) -> Sequence[OnboardingData]:
        raise NotImplementedError

    def get(self, submission_id: str) -> Optional[OnboardingData]:
        raise NotImplementedError

    def add(self, submission: OnboardingData) -> OnboardingData:
        raise NotImplementedError

    def save(self, submission: OnboardingData) -> OnboardingData:
        """Replace an existing submission; raises KeyError when the id is unknown."""

        raise NotImplementedError
