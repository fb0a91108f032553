"""Runtime configuration and the directive catalog data."""
