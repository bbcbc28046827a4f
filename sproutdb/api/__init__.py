"""HTTP transport for SproutDB tables."""
