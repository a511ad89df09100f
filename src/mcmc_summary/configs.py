from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Tuple

DEFAULT_EXCLUDE_REGEX = r"^(r|s|z|zs|zgp|Xme|L|Lrescor|prior|lp)(_|$)"

# Family-specific (distributional) parameters shared by the common families.
DEFAULT_DPARS: Tuple[str, ...] = (
    "sigma",
    "shape",
    "nu",
    "phi",
    "kappa",
    "beta",
    "zi",
    "hu",
    "zoi",
    "coi",
    "disc",
    "ndt",
    "bias",
    "xi",
    "alpha",
    "quantile",
)

DEFAULT_FIXEF_TYPES: Tuple[str, ...] = ("", "s", "cs", "sp", "mo", "me", "mi", "m")

DEFAULT_AUTOCOR_PARS: Tuple[str, ...] = (
    "ar",
    "ma",
    "arr",
    "lagsar",
    "errorsar",
    "car",
    "sdcar",
    "sigmaLL",
)


@dataclass(frozen=True)
class ClassifierConfig:
    """Naming conventions used to sort parameters into summary groups.

    ``dpars`` lists the family-specific parameters valid for the model;
    ``delta`` is always treated as one of them.
    """

    exclude_regex: str = DEFAULT_EXCLUDE_REGEX
    dpars: Tuple[str, ...] = DEFAULT_DPARS
    fixef_types: Tuple[str, ...] = DEFAULT_FIXEF_TYPES
    autocor_pars: Tuple[str, ...] = DEFAULT_AUTOCOR_PARS

    def with_dpars(self, dpars) -> "ClassifierConfig":
        return replace(self, dpars=tuple(dpars))

    @property
    def fixef_regex(self) -> str:
        types = "|".join(f"({t})" for t in self.fixef_types)
        return f"^b({types})_"

    @property
    def dpar_regex(self) -> str:
        names = [*self.dpars, "delta"]
        return f"^({'|'.join(re.escape(n) for n in names)})($|_)"

    @property
    def autocor_regex(self) -> str:
        names = "|".join(f"({p})" for p in self.autocor_pars)
        return rf"^({names})(\[|_|$)"


@dataclass(frozen=True)
class SummaryConfig:
    prob: float = 0.95
    rhat_threshold: float = 1.05
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
