"""SQLite repositories for the kurban tables."""