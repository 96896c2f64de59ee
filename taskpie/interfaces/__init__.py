"""User-facing interfaces for taskpie.

- cli: Typer command-line application
"""
