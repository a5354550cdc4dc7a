from __future__ import annotations

from typing import Optional, Sequence

from ..store.mock_database import MockDatabase
from .model import OnboardingData


class InMemorySubmissionRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list_all(self) -> Sequence[OnboardingData]:
        with self._db.lock:
            return list(self._db.onboarding_submissions)

    def get(self, submission_id: str) -> Optional[OnboardingData]:
        with self._db.lock:
            return next((s for s in self._db.onboarding_submissions if s.id == submission_id), None)

    def add(self, submission: OnboardingData) -> OnboardingData:
        with self._db.lock:
            self._db.onboarding_submissions.append(submission)
        return submission

    def save(self, submission: OnboardingData) -> OnboardingData:
        with self._db.lock:
            for i, s in enumerate(self._db.onboarding_submissions):
                if s.id == submission.id:
                    self._db.onboarding_submissions[i] = submission
                    return submission
        raise KeyError(submission.id)
