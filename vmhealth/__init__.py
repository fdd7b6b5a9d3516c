"""vmhealth: CPU, memory and disk health check for a single host."""

__version__ = "1.0.0"
