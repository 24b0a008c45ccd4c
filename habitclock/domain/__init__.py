"""Control definitions and slider discretization."""
