"""Settings and MongoDB connection lifecycle."""
