"""Utility helpers for ScamSense."""
