"""TradeLens command line interface."""
