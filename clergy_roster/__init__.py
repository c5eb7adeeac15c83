"""Clergy roster console - roster sync, filtering, editing workflows and NiceGUI views."""
