from .advisory import convergence_messages
from .convergence import (
    ConvergenceDiagnostics,
    convergence_diagnostics,
    ess_bulk,
    ess_tail,
    rhat,
)

__all__ = [
    "ConvergenceDiagnostics",
    "convergence_diagnostics",
    "convergence_messages",
    "ess_bulk",
    "ess_tail",
    "rhat",
]
