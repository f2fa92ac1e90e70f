"""AI customer-support chat backend."""
