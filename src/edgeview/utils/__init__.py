"""Collaborator helpers living around the filter engine."""
