"""Agents served by this service."""
