"""Solvelt - step-by-step explanations for photographed homework problems."""
