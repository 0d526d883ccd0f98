"""Domain layer - pure reconciliation logic with no I/O."""
