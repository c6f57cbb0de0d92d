"""Static datasets bundled with the service."""
