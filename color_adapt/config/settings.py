# Application settings

# --- Adaptation Parameters ---
ADAPTATION_DEFAULTS = {
    # Assumed reference white level of the display (not measured)
    "screen_white_point": 120,

    # White point estimation
    "white_threshold": 50, # Pixel is near-white when every channel > 255 - threshold
    "no_white_fallback": 255, # White point used when no pixel qualifies

    # Display brightness
    "raw_brightness_max": 255, # Raw system brightness setting is 0-255
    "brightness_fallback_percent": 50, # Used when the raw reading is unavailable/out of range

    # Chunked scanning
    "chunk_rows": 256,
    "max_workers": 1, # 1 = serial scan
}

# --- IO Defaults ---
IO_DEFAULTS = {
    "default_jpeg_quality": 95,
    "default_png_compression": 6,
}

# --- Logging ---
LOGGING_LEVEL = "INFO" # Options: DEBUG, INFO, WARNING, ERROR
LOGGING_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
