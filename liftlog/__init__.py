"""LiftLog: multi-user workout log with session auth and derived personal records."""

__version__ = "0.1.0"
