"""Tram finder: which upcoming tram can a rider still catch."""
