"""Handler groups subscribed to the event bus."""
