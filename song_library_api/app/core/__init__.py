"""Settings, logging, database access and exceptions shared by the app."""
