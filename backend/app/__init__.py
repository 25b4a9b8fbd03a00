"""Hearth backend application."""
