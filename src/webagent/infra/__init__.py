"""Infrastructure: provider client, memory store, logging, telemetry."""
