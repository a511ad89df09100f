"""Sort parameter names into the blocks of a model summary.

Parameter names produced by the model-fitting layer encode their role in a
prefix (``b_`` for population-level coefficients, ``sd_<group>__`` for
group-level standard deviations, ...). :func:`parse_parameter_name` turns
each name into a :class:`ParsedParameter` carrying an explicit
:class:`ParameterKind`; everything downstream dispatches on that kind and
never looks at the raw name again.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..configs import ClassifierConfig
from ..errors import ClassificationGap


class ParameterKind(Enum):
    EXCLUDED = "excluded"
    POPULATION = "population"
    FAMILY = "family"
    RESIDUAL_COR = "residual_cor"
    AUTOCOR = "autocor"
    GROUP_DF = "group_df"
    GROUP_SD = "group_sd"
    GROUP_COR = "group_cor"
    SMOOTH_SD = "smooth_sd"
    MONOTONIC = "monotonic"
    GP_SD = "gp_sd"
    GP_LSCALE = "gp_lscale"


# Summary block of each kind; group-level kinds are collected per group.
BLOCKS: Dict[ParameterKind, str] = {
    ParameterKind.POPULATION: "fixed",
    ParameterKind.FAMILY: "spec_pars",
    ParameterKind.RESIDUAL_COR: "rescor_pars",
    ParameterKind.AUTOCOR: "cor_pars",
    ParameterKind.SMOOTH_SD: "splines",
    ParameterKind.MONOTONIC: "mo",
    ParameterKind.GP_SD: "gp",
    ParameterKind.GP_LSCALE: "gp",
}
BLOCK_ORDER: Tuple[str, ...] = (
    "fixed",
    "spec_pars",
    "rescor_pars",
    "cor_pars",
    "splines",
    "mo",
    "gp",
)
GROUP_KINDS: Tuple[ParameterKind, ...] = (
    ParameterKind.GROUP_DF,
    ParameterKind.GROUP_SD,
    ParameterKind.GROUP_COR,
)


@dataclass(frozen=True)
class ParsedParameter:
    name: str
    kind: ParameterKind
    label: str
    group: Optional[str] = None

    @property
    def block(self) -> Optional[str]:
        return BLOCKS.get(self.kind)


@dataclass(frozen=True)
class _Rule:
    kind: ParameterKind
    pattern: "re.Pattern[str]"
    relabel: Callable[[re.Match], str]
    group: Optional[str] = None


def _rest(match: re.Match) -> str:
    return match.string[match.end() :]


def _build_rules(
    group_labels: Sequence[str], config: ClassifierConfig
) -> List[_Rule]:
    """Naming rules in precedence order (exclusion is handled separately)."""
    rules = [
        _Rule(
            ParameterKind.POPULATION,
            re.compile(config.fixef_regex),
            _rest,
        ),
        _Rule(
            ParameterKind.FAMILY,
            re.compile(config.dpar_regex),
            lambda m: m.string,
        ),
        _Rule(
            ParameterKind.RESIDUAL_COR,
            re.compile(r"^rescor_"),
            lambda m: m.string.replace("__", "(", 1).replace("__", ",", 1) + ")",
        ),
        _Rule(
            ParameterKind.AUTOCOR,
            re.compile(config.autocor_regex),
            lambda m: m.string,
        ),
    ]
    for g in group_labels:
        gregex = re.escape(g)
        rules.extend(
            [
                _Rule(
                    ParameterKind.GROUP_DF,
                    re.compile(f"^df_{gregex}$"),
                    lambda m: "df",
                    group=g,
                ),
                _Rule(
                    ParameterKind.GROUP_SD,
                    re.compile(f"^sd_{gregex}__"),
                    lambda m: f"sd({_rest(m)})",
                    group=g,
                ),
                _Rule(
                    ParameterKind.GROUP_COR,
                    re.compile(f"^cor_{gregex}__"),
                    lambda m: f"cor({_rest(m).replace('__', ',', 1)})",
                    group=g,
                ),
            ]
        )
    rules.extend(
        [
            _Rule(
                ParameterKind.SMOOTH_SD,
                re.compile(r"^sds_"),
                lambda m: f"sds({_rest(m)})",
            ),
            _Rule(ParameterKind.MONOTONIC, re.compile(r"^simo_"), _rest),
            _Rule(
                ParameterKind.GP_SD,
                re.compile(r"^sdgp_"),
                lambda m: f"sdgp({_rest(m)})",
            ),
            _Rule(
                ParameterKind.GP_LSCALE,
                re.compile(r"^lscale_"),
                lambda m: f"lscale({_rest(m)})",
            ),
        ]
    )
    return rules


class NameParser:
    """Parse parameter names for a fixed set of grouping factors."""

    def __init__(
        self,
        group_labels: Sequence[str] = (),
        config: Optional[ClassifierConfig] = None,
    ):
        self.config = config or ClassifierConfig()
        self.group_labels = list(group_labels)
        self._exclude = re.compile(self.config.exclude_regex)
        self._rules = _build_rules(self.group_labels, self.config)

    def matches(self, name: str) -> List[ParsedParameter]:
        """Every interpretation of ``name``; exclusion shadows the rest."""
        if self._exclude.search(name):
            return [ParsedParameter(name, ParameterKind.EXCLUDED, name)]
        found = []
        for rule in self._rules:
            m = rule.pattern.search(name)
            if m is not None:
                found.append(
                    ParsedParameter(name, rule.kind, rule.relabel(m), rule.group)
                )
        return found

    def parse(self, name: str) -> ParsedParameter:
        found = self.matches(name)
        if not found:
            raise ClassificationGap(unmatched=[name])
        if len(found) > 1:
            raise ClassificationGap(ambiguous=[name])
        return found[0]


def parse_parameter_name(
    name: str,
    group_labels: Sequence[str] = (),
    config: Optional[ClassifierConfig] = None,
) -> ParsedParameter:
    """Classify a single parameter name."""
    return NameParser(group_labels, config).parse(name)


@dataclass
class Classification:
    """Parameters partitioned into the blocks of a summary."""

    excluded: List[str] = field(default_factory=list)
    blocks: Dict[str, List[ParsedParameter]] = field(default_factory=dict)
    random: Dict[str, List[ParsedParameter]] = field(default_factory=dict)

    def members(self) -> Iterable[ParsedParameter]:
        for block in self.blocks.values():
            yield from block
        for group in self.random.values():
            yield from group

    def names(self) -> List[str]:
        """Every classified name, excluded ones first."""
        return [*self.excluded, *(p.name for p in self.members())]

    def included(self) -> List[str]:
        return [p.name for p in self.members()]

    def labels(self, block: str) -> Dict[str, str]:
        """Display name -> parameter name for a block."""
        return {p.label: p.name for p in self.blocks.get(block, [])}

    def group_labels(self, group: str) -> Dict[str, str]:
        return {p.label: p.name for p in self.random.get(group, [])}


def partition_parameters(
    parsed: Iterable[ParsedParameter], group_labels: Sequence[str] = ()
) -> Classification:
    """Partition tagged parameters into summary blocks.

    Blocks keep the input order, except that group-level parameters are
    ordered degrees of freedom, standard deviations, then correlations
    within each group.
    """
    parsed = list(parsed)
    duplicated = [n for n, c in Counter(p.name for p in parsed).items() if c > 1]
    if duplicated:
        raise ClassificationGap(duplicated=duplicated)

    out = Classification()
    out.blocks = {block: [] for block in BLOCK_ORDER}
    groups = list(group_labels)
    for p in parsed:
        if p.kind in GROUP_KINDS and p.group not in groups:
            groups.append(p.group)
    out.random = {g: [] for g in groups}

    for p in parsed:
        if p.kind is ParameterKind.EXCLUDED:
            out.excluded.append(p.name)
        elif p.kind in GROUP_KINDS:
            out.random[p.group].append(p)
        else:
            out.blocks[p.block].append(p)

    rank = {kind: i for i, kind in enumerate(GROUP_KINDS)}
    for g, members in out.random.items():
        # sorted() is stable, so input order is kept within each kind
        out.random[g] = sorted(members, key=lambda p: rank[p.kind])
    return out


def classify_parameters(
    names: Sequence[str],
    group_labels: Sequence[str] = (),
    config: Optional[ClassifierConfig] = None,
) -> Classification:
    """Classify parameter names and partition them into summary blocks.

    Raises
    ------
    ClassificationGap
        If a name is claimed by no naming rule, by more than one rule, or
        occurs more than once.
    """
    parser = NameParser(group_labels, config)
    parsed, unmatched, ambiguous = [], [], []
    for name in names:
        found = parser.matches(name)
        if not found:
            unmatched.append(name)
        elif len(found) > 1:
            ambiguous.append(name)
        else:
            parsed.append(found[0])
    duplicated = [n for n, c in Counter(names).items() if c > 1]
    if unmatched or ambiguous or duplicated:
        raise ClassificationGap(unmatched, ambiguous, duplicated)
    return partition_parameters(parsed, parser.group_labels)
