"""Session state and the engine facade."""
