"""Application layer - the board's state and interaction engine."""
