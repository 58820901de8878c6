"""Operational entry points for ResumeCraft."""
