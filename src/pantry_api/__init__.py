"""Recipe and food tracking API."""
