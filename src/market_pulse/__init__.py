"""Market pulse: aggregated crypto, equity and wallet data behind one API."""
