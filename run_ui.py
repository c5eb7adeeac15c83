"""Run the clergy roster console."""

from clergy_roster.ui.main_app import run_app

if __name__ in {"__main__", "__mp_main__"}:
    run_app()
