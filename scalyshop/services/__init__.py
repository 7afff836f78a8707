"""Service layer coordinating repositories and observability."""
