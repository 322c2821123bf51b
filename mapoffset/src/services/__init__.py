"""Services orchestrating the offset engine for the editor."""
