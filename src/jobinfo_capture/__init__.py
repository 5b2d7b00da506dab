"""Job information capture with resume-driven technology extraction."""
