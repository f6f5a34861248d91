"""Infrastructure: settings, database engine and logging."""
