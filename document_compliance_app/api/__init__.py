"""HTTP surface over the compliance evaluator."""
