"""Pydantic data models for apkguide.

This package defines the interchange format between the generation
client and the presentation layer:
- Interactive actions (Action, ActionKind)
- Guide pages (FlatStep, OsBranchingStep, the Step union, StepContent)
- Generation inputs (GenerationRequest, OperatingSystem)

All models are frozen Pydantic BaseModel subclasses, so a generated guide
is never mutated after it has been validated.

Example:
    >>> from apkguide.models import parse_steps
    >>> steps = parse_steps([{"title": "T", "explanation": "E"}])
    >>> steps[0].command is None
    True
"""

from .action import Action, ActionKind
from .request import GenerationRequest
from .step import (
    FlatStep,
    OperatingSystem,
    OsBranchingStep,
    Step,
    StepContent,
    dump_steps,
    parse_steps,
)

__all__ = [
    "Action",
    "ActionKind",
    "FlatStep",
    "GenerationRequest",
    "OperatingSystem",
    "OsBranchingStep",
    "Step",
    "StepContent",
    "dump_steps",
    "parse_steps",
]
