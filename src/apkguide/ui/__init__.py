"""Terminal presentation for generated guides."""

from .navigator import SUB_STAGES, StepNavigator, SubStage, SubStageNavigator, uses_sub_stages
from .render import render_details, render_status, render_step, render_summary
from .wizard import Wizard

__all__ = [
    "SUB_STAGES",
    "StepNavigator",
    "SubStage",
    "SubStageNavigator",
    "Wizard",
    "render_details",
    "render_status",
    "render_step",
    "render_summary",
    "uses_sub_stages",
]
