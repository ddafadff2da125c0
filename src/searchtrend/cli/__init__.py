"""Command line interface for searchtrend."""
