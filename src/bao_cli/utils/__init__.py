"""Shared helpers for Bao."""
