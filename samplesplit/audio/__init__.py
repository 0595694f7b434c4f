"""Audio helpers: buffer types, silence splitting, WAV coding and decoding."""
