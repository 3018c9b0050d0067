"""Generic reconciliation: identity, lifecycle, drift, retry and the engine."""
