"""Law-checking tasks for the Exterior kernel.

Each task inherits from :class:`BaseTask` and implements
setup_maps and check; :meth:`BaseTask.run` drives them.
"""

from .base import BaseTask
from .alternation import AlternationCheckTask
from .wedge import WedgeCheckTask

__all__ = [
    "BaseTask",
    "AlternationCheckTask",
    "WedgeCheckTask",
]
