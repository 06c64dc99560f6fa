"""Immutable models shared between the workspace domain and the view."""
