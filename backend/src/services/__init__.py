"""Catalog service layer."""
