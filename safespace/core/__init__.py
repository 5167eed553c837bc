"""SafeSpace core server: record store, REST API and chat relay."""
