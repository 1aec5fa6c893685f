"""Qt front end for the brainstormer."""

from .brainstormer_widget import BrainstormerWidget
from .concept_panel import ConceptPanel
from .frame_timer import QtFrameClock
from .reel_widget import ReelWidget

__all__ = ["BrainstormerWidget", "ConceptPanel", "QtFrameClock", "ReelWidget"]
