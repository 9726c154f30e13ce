"""Discovery and parsing of lighthouse trigger configs."""
