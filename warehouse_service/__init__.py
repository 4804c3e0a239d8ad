"""Warehouse master-data service."""
