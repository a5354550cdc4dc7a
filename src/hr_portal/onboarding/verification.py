from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    message: str
    verified_fields: dict = field(default_factory=dict)


class MockVerificationGateway:
    """Stand-in for the identity-verification provider.

    Aadhaar and bank calls succeed with probability ``success_rate`` and UAN
    lookups with ``uan_success_rate`` (drawn from ``rng``) once the input
    passes the basic format check.
    """

    def __init__(
        self,
        *,
        success_rate: float = 0.9,
        uan_success_rate: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self._success_rate = success_rate
        self._uan_success_rate = success_rate if uan_success_rate is None else uan_success_rate
        self._rng = rng or random.Random()

    def _lucky(self, rate: float) -> bool:
        return self._rng.random() < rate

    @staticmethod
    def _twelve_digits(value) -> bool:
        # JSON forms may carry these numbers as ints
        text = "" if value is None else str(value).strip()
        return len(text) == 12 and text.isdigit()

    def verify_aadhaar(self, aadhaar_number) -> VerificationResult:
        if self._twelve_digits(aadhaar_number) and self._lucky(self._success_rate):
            return VerificationResult(True, "Aadhaar details verified (mocked).", {"id_proof_number": True})
        return VerificationResult(False, "Aadhaar verification failed (mocked).", {"id_proof_number": False})

    def verify_bank_account(self, *, account_number, ifsc_code, account_holder_name) -> VerificationResult:
        if self._lucky(self._success_rate):
            return VerificationResult(
                True,
                "Bank account verified (mocked).",
                {"account_holder_name": True, "account_number": True},
            )
        return VerificationResult(
            False,
            "Bank name mismatch found (mocked).",
            {"account_holder_name": False, "account_number": True},
        )

    def lookup_uan(self, uan) -> VerificationResult:
        if self._twelve_digits(uan) and self._lucky(self._uan_success_rate):
            return VerificationResult(True, "UAN lookup successful (mocked).", {"uan_number": True})
        return VerificationResult(False, "UAN not found (mocked).", {"uan_number": False})
