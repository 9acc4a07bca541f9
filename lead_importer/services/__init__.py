"""Import pipeline services: mapping, normalization, dedup and the state machine."""
