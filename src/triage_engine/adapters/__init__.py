"""UI host adapters."""
