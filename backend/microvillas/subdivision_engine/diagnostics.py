"""
Structured diagnostics for soft failures in the subdivision engine.

The engine never raises for budget overruns or advisory invariant checks.
It hands a Diagnostic to a sink instead, so the host decides how to surface
it.  The default sink writes the record to the module logger at WARNING.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)

COMMON_AREA_SUM_OUT_OF_TOLERANCE = "common_area_sum_out_of_tolerance"
SCENARIO_SWEEP_OVER_BUDGET = "scenario_sweep_over_budget"
FINANCIAL_RECALC_OVER_BUDGET = "financial_recalc_over_budget"
SOCIAL_CLUB_EXCEEDS_LAND = "social_club_exceeds_land"


@dataclass
class Diagnostic:
    code: str
    message: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: log at WARNING with the payload attached as extra."""
    logger.warning(
        "%s: %s %s", diagnostic.code, diagnostic.message, diagnostic.data,
        extra={"diagnostic": diagnostic.to_dict()},
    )


def emit(sink: Optional[DiagnosticSink], code: str, message: str, **data) -> Diagnostic:
    diagnostic = Diagnostic(code=code, message=message, data=data)
    (sink or log_diagnostic)(diagnostic)
    return diagnostic
