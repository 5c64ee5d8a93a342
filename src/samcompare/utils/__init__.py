"""Utility helpers for samcompare."""
