import dataclasses
import re
from typing import List, Optional, Sequence

import numpy as np


@dataclasses.dataclass
class Draws:
    """Post-warmup posterior draws of a fitted model.

    ``samples`` has shape ``(iteration, chain, parameter)`` and ``names``
    labels the last axis. ``iter`` counts all iterations per chain, warmup
    included, as reported by the sampler.
    """

    samples: np.ndarray
    names: List[str]
    iter: Optional[int] = None
    warmup: int = 0
    thin: int = 1
    algorithm: str = "sampling"
    sampler: str = ""
    divergent: Optional[np.ndarray] = None  # (iteration, chain) indicators
    adapt_delta: Optional[float] = None

    def __post_init__(self):
        self.samples = np.asarray(self.samples, dtype=float)
        self.names = [str(n) for n in self.names]
        if self.samples.ndim != 3:
            raise ValueError(
                "samples must have shape (iteration, chain, parameter); "
                f"got {self.samples.ndim} dimension(s)."
            )
        if self.samples.shape[2] != len(self.names):
            raise ValueError(
                f"Got {len(self.names)} names for "
                f"{self.samples.shape[2]} parameters."
            )
        if len(set(self.names)) != len(self.names):
            raise ValueError("Parameter names must be unique.")
        if self.thin < 1:
            raise ValueError("thin must be a positive integer.")
        if self.iter is None:
            self.iter = self.warmup + self.n_iterations * self.thin
        if self.divergent is not None:
            self.divergent = np.asarray(self.divergent)
            if self.divergent.shape != self.samples.shape[:2]:
                raise ValueError(
                    "divergent must have shape (iteration, chain) = "
                    f"{self.samples.shape[:2]}; got {self.divergent.shape}."
                )

    @classmethod
    def from_matrix(
        cls, matrix: np.ndarray, names: Sequence[str], **kwargs
    ) -> "Draws":
        """Wrap a ``(draw, parameter)`` matrix as a single chain."""
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2:
            raise ValueError("matrix must have shape (draw, parameter).")
        return cls(matrix[:, None, :], list(names), **kwargs)

    @property
    def n_iterations(self) -> int:
        return int(self.samples.shape[0])

    @property
    def n_chains(self) -> int:
        return int(self.samples.shape[1])

    @property
    def n_draws(self) -> int:
        """Total number of post-warmup draws across chains."""
        return self.n_iterations * self.n_chains

    @property
    def n_divergent(self) -> int:
        if self.divergent is None:
            return 0
        return int(np.sum(self.divergent))

    def select(
        self, pars: Optional[Sequence[str]] = None, fixed: bool = False
    ) -> List[str]:
        """Names matching ``pars``, in storage order.

        Entries of ``pars`` are regular expressions unless ``fixed`` is set,
        in which case they must be exact names and are returned in the
        requested order.
        """
        if pars is None:
            return list(self.names)
        if isinstance(pars, str):
            pars = [pars]
        if fixed:
            missing = [p for p in pars if p not in self.names]
            if missing:
                raise KeyError(f"Unknown parameters: {', '.join(missing)}")
            return list(pars)
        patterns = [re.compile(p) for p in pars]
        return [n for n in self.names if any(p.search(n) for p in patterns)]

    def subset(self, names: Optional[Sequence[str]] = None) -> np.ndarray:
        """Return the ``(iteration, chain, len(names))`` slice for ``names``."""
        if names is None:
            return self.samples
        index = {n: i for i, n in enumerate(self.names)}
        try:
            idx = [index[n] for n in names]
        except KeyError as exc:
            raise KeyError(f"Unknown parameter: {exc.args[0]}") from None
        return self.samples[:, :, idx]

    def as_matrix(self, names: Optional[Sequence[str]] = None) -> np.ndarray:
        """Pool chains into a ``(draw, parameter)`` matrix, chain by chain."""
        sims = self.subset(names)
        n_iter, n_chain, n_par = sims.shape
        return np.transpose(sims, (1, 0, 2)).reshape(n_iter * n_chain, n_par)
