"""Pre-execution admission control."""

from query_guard.admission.gate import (
    ALLOWED,
    AdmissionDecision,
    AdmissionGate,
    AdmissionPolicy,
    Allowed,
    Evaluation,
    Rejected,
    RejectionKind,
)

__all__ = [
    "ALLOWED",
    "AdmissionDecision",
    "AdmissionGate",
    "AdmissionPolicy",
    "Allowed",
    "Evaluation",
    "Rejected",
    "RejectionKind",
]
