"""HTTP API for the lead scoring engine."""
