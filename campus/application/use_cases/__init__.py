"""Use cases: application intake, enrollments, offerings, reconciliation."""
