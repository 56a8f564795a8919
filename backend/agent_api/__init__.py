"""Chat agent API: streams agent replies as newline-delimited JSON deltas."""
