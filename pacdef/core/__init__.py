"""Core — group models, configuration, reconciliation engine, use cases."""
