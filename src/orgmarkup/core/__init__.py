"""Buffer model, host ports and the rewrite engine."""
