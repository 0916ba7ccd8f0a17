"""Catalog, configuration and persistence for jobrank."""
