# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Exterior CLI Entry Point.

Dispatches law-checking tasks, e.g. ``python main.py name=wedge check.left=2``.
"""

import hydra
from omegaconf import DictConfig

from tasks.alternation import AlternationCheckTask
from tasks.wedge import WedgeCheckTask

TASKS = {
    'alternation': AlternationCheckTask,
    'wedge': WedgeCheckTask,
}


def run_task(cfg: DictConfig):
    """Build the task named by ``cfg.name`` and run it.

    Args:
        cfg (DictConfig): The plan.

    Returns:
        dict: The task's per-law summary.
    """
    task_name = cfg.name
    if task_name not in TASKS:
        raise ValueError(f"Unknown task: {task_name}. Available: {list(TASKS.keys())}")
    return TASKS[task_name](cfg).run()


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig):
    run_task(cfg)


if __name__ == "__main__":
    main()
