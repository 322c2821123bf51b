"""Plain data models exchanged with the editor."""
