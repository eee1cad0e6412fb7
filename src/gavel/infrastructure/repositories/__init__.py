"""Repositories: one class per stored collection."""
