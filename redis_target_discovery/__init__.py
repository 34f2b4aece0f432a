"""Discover the Redis instances a metrics exporter should poll."""
