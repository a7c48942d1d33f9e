"""Catalog administration backend."""
