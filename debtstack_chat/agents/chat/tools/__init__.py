"""Chat tools: catalog, request builders, response shaping and dispatch."""
