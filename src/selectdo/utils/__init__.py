"""Utility helpers for Select + Do."""
