"""Payment domain rules."""
