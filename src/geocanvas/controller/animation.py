"""
Marching-ants animation of the selected line.
"""
from __future__ import annotations

import logging
from typing import Optional

from geocanvas.config import ANIMATION, AnimationConfig

logger = logging.getLogger(__name__)


class LineAnimation:
    """
    Selection and phase clock of the animated line.

    At most one line animates at a time. The phase advances only on
    ``tick()``, which the host calls once per frame.
    """

    def __init__(self, config: AnimationConfig = ANIMATION) -> None:
        self.config = config
        self.selected_line_id: Optional[int] = None
        self.active: bool = False
        self.phase: int = 0

    def toggle(self, line_id: int) -> None:
        """Select ``line_id``, or deselect it if it is already the animated line."""
        if self.selected_line_id == line_id:
            self.selected_line_id = None
            self.active = False
            logger.debug("Stopped animation of line %d.", line_id)
        else:
            self.selected_line_id = line_id
            self.active = True
            logger.debug("Animating line %d.", line_id)

    def tick(self) -> None:
        if self.active:
            self.phase = (self.phase + self.config.step) % self.config.period

    def reset(self) -> None:
        self.selected_line_id = None
        self.active = False
        self.phase = 0
