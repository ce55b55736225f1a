"""Audit pipeline components."""
