# src/bioenergetic/models/foodweb.py
"""Food-web topology and species roles.

A FoodWeb holds the structural part of a community: the diet matrix
(A[i, j] is True when species i eats species j), role flags and body masses.
Rate models receive a FoodWeb when they are evaluated, so the same model can
be materialized for any community.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np


class Role(IntEnum):
    """Species role used to select role-specific rate coefficients."""

    PRODUCER = 0
    INVERTEBRATE = 1
    VERTEBRATE = 2


def freeze(array: np.ndarray, dtype=float) -> np.ndarray:
    """Return a read-only copy of ``array``."""
    frozen = np.array(array, dtype=dtype, copy=True)
    frozen.setflags(write=False)
    return frozen


@dataclass(frozen=True)
class FoodWeb:
    """Diet matrix, role flags and standardized body masses.

    Attributes:
        A: Boolean diet matrix [S, S].
        is_producer: Producer flags [S] (species without prey).
        is_vertebrate: Vertebrate flags [S], ignored for producers.
        bodymass: Body mass relative to the smallest producer [S].
        handling_time: Handling time, set once it has been evaluated so that
            attack-rate models depending on it can read it.
    """

    A: np.ndarray
    is_producer: np.ndarray
    is_vertebrate: np.ndarray
    bodymass: np.ndarray
    handling_time: Optional[np.ndarray] = None

    @classmethod
    def from_matrix(
        cls,
        A,
        bodymass,
        vertebrates=None,
    ) -> "FoodWeb":
        """Build a FoodWeb, deriving producers as species with an empty diet."""
        A = np.asarray(A) != 0
        S = A.shape[0]
        if vertebrates is None:
            vertebrates = np.zeros(S, dtype=bool)
        is_producer = ~A.any(axis=1)
        return cls(
            A=freeze(A, dtype=bool),
            is_producer=freeze(is_producer, dtype=bool),
            is_vertebrate=freeze(np.asarray(vertebrates, dtype=bool) & ~is_producer, dtype=bool),
            bodymass=freeze(bodymass),
        )

    @property
    def S(self) -> int:
        return self.A.shape[0]

    @property
    def num_producers(self) -> int:
        return int(np.sum(self.is_producer))

    @property
    def links(self) -> int:
        return int(np.sum(self.A))

    @property
    def roles(self) -> np.ndarray:
        """Per-species Role values as an integer array usable as an index."""
        roles = np.full(self.S, int(Role.INVERTEBRATE), dtype=np.intp)
        roles[self.is_vertebrate] = int(Role.VERTEBRATE)
        roles[self.is_producer] = int(Role.PRODUCER)
        return roles


def homogeneous_preferences(A: np.ndarray) -> np.ndarray:
    """Equal preference 1/n_prey for each of a consumer's resources."""
    A = np.asarray(A, dtype=float)
    n_prey = A.sum(axis=1, keepdims=True)
    return np.divide(A, n_prey, out=np.zeros_like(A), where=n_prey > 0)


def trophic_rank(A: np.ndarray) -> np.ndarray:
    """Prey-averaged trophic level.

    Producers sit at level 1 and every consumer one level above the mean of
    its prey, i.e. the solution of ``(I - W) TL = 1`` with W the homogeneous
    preference matrix.

    Raises:
        numpy.linalg.LinAlgError: If some consumers are not connected to any
            producer, which leaves the system singular.
    """
    W = homogeneous_preferences(A)
    S = W.shape[0]
    return np.linalg.solve(np.eye(S) - W, np.ones(S))
