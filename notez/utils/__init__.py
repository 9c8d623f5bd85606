"""Utility helpers for notez."""
