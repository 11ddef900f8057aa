"""Domain services: matching, verdicts, lookups, profile storage."""
