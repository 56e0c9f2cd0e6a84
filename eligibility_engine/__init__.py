"""Unpaid-leave eligibility engine: decision-table evaluation exposed as a tool."""

__version__ = "1.0.0"
