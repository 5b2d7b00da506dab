"""Capture form workflow."""
from jobinfo_capture.form.state_machine import (
    CaptureState,
    CaptureStateMachine,
    SubmitResult,
)

__all__ = ["CaptureState", "CaptureStateMachine", "SubmitResult"]
