import dataclasses
from typing import Any, Dict, Optional, Sequence


@dataclasses.dataclass
class FitMetadata:
    """Descriptive information about the fitted model.

    Everything here is supplied by the model-fitting layer and passed
    through to the report; ``ngrps`` also provides the grouping factors
    whose group-level parameters get their own summary block.
    """

    formula: Optional[str] = None
    family: Optional[str] = None
    data_name: Optional[str] = None
    nobs: Optional[int] = None
    ngrps: Dict[str, Optional[int]] = dataclasses.field(default_factory=dict)
    dpars: Optional[Sequence[str]] = None
    autocor: Optional[str] = None
    prior: Any = None

    @property
    def group(self):
        return list(self.ngrps)
