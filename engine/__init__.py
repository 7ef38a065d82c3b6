"""Game-agnostic runtime primitives: events, flow, logging and AI blackboards."""
