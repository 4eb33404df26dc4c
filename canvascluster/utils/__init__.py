"""Utility helpers for canvascluster."""
