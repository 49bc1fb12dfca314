"""Runtime services shared across the engine (telemetry)."""
