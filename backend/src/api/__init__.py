"""HTTP API for the bookmark catalog."""
