"""Trade lookup: multi-mode trade search over the Trade Service API."""
