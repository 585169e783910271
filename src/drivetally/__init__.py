"""Drivetally: day-by-day profit tracking for rideshare and delivery drivers."""

__version__ = "0.1.0"


def __getattr__(name):
    # The CLI pulls in click and the database layer, so load it on first use
    if name == "main":
        from drivetally.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
