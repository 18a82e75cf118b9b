"""TradeLens calculation libraries (pure, no I/O)."""
