"""Turn rotation for concurrent write/draw party games."""
