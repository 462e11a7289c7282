"""Host-side adapters: drawer blocks, renderers, codecs and property lookup."""
