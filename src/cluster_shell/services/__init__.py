"""Service layer between shell commands and external systems."""
