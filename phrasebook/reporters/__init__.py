"""Reporters - Run records."""

from phrasebook.reporters.step_recorder import StepRecorder

__all__ = ["StepRecorder"]
