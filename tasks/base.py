# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

import math
from abc import ABC, abstractmethod
from typing import Dict, List

import torch
from omegaconf import DictConfig
from tqdm import tqdm

from core.alternating import AlternatingMap
from core.permutation import Permutation
from log import get_logger, set_level

logger = get_logger(__name__)

# Factorial cost: refuse configurations that would not finish.
MAX_ARITY = 8


class BaseTask(ABC):
    """Abstract base class for law-checking tasks.

    Lifecycle: setup_maps → get_data → check (per map, per family) → summary.

    Attributes:
        cfg (DictConfig): Hydra configuration.
        generator (torch.Generator): Seeded source for every random draw.
        maps (dict): Name → alternating map under test.
    """

    def __init__(self, cfg: DictConfig):
        """Sets up the task.

        Args:
            cfg (DictConfig): Hydra config.
        """
        self.cfg = cfg
        if cfg.get('log_level'):
            set_level(cfg.log_level)

        check = cfg.check
        self.dim = int(check.dim)
        self.trials = int(check.trials)
        self.low = int(check.get('low', -5))
        self.high = int(check.get('high', 6))
        if self.high <= self.low:
            raise ValueError(f"empty sampling range [{self.low}, {self.high})")
        self.generator = torch.Generator().manual_seed(int(check.get('seed', 0)))

        self.maps = self.setup_maps()
        for name, f in self.maps.items():
            self.bound_arity(name, f.arity)

    def bound_arity(self, name: str, arity: int) -> int:
        """Reject arities whose factorial enumeration would not finish."""
        if arity > MAX_ARITY:
            raise ValueError(
                f"{name} has arity {arity}; evaluation costs {math.factorial(arity)} "
                f"terms, bound it to {MAX_ARITY} or fewer"
            )
        return arity

    @abstractmethod
    def setup_maps(self) -> Dict[str, AlternatingMap]:
        """Construct the alternating maps under test."""
        pass

    @abstractmethod
    def check(self, name: str, f: AlternatingMap, values: tuple) -> List[str]:
        """Check every law for one family; return the names of the laws checked.

        Raises:
            InvariantViolation: On the first law that fails.
        """
        pass

    def random_vector(self) -> torch.Tensor:
        return torch.randint(self.low, self.high, (self.dim,),
                             generator=self.generator, dtype=torch.int64)

    def random_coeffs(self, *shape: int) -> torch.Tensor:
        return torch.randint(self.low, self.high, shape,
                             generator=self.generator, dtype=torch.int64)

    def random_permutation(self, index) -> Permutation:
        image = torch.randperm(len(index), generator=self.generator).tolist()
        return Permutation(index, image)

    def random_pair(self, index):
        """Two distinct labels of *index*."""
        p, q = torch.randperm(len(index), generator=self.generator)[:2].tolist()
        return index.label(p), index.label(q)

    def get_data(self, f: AlternatingMap) -> List[tuple]:
        """Random integer families for *f*."""
        return [tuple(self.random_vector() for _ in range(f.arity)) for _ in range(self.trials)]

    def run(self) -> Dict[str, Dict[str, int]]:
        """Check every map on fresh random families and log a summary.

        Returns:
            dict: Map name → law name → number of passing checks.
        """
        logger.info("Starting Task: %s", self.cfg.name)
        summary = {}
        for name, f in self.maps.items():
            counts = {}
            for values in tqdm(self.get_data(f), desc=name, leave=False):
                for law in self.check(name, f, values):
                    counts[law] = counts.get(law, 0) + 1
            summary[name] = counts
            desc = " | ".join(f"{law}: {n}" for law, n in counts.items())
            logger.info("%s (arity %d) passed %s", name, f.arity, desc)

        logger.info("All laws hold for %d maps.", len(summary))
        return summary
