"""Utility helpers for the questionnaire app."""
