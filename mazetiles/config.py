# === Global configuration & tuning ===

# Pixel size of one tile sprite
TILE = 24

# === Level Layout ===
# Quarter layout of the level, mirrored into the full map at load time.
# Must not include trailing commas or blank lines.
LEVEL_FILE = "data/levels/level01.csv"

# JSON overrides for the generator (level file, tile set, strictness)
LEVEL_CONFIG_PATH = "config/level_config.json"

# Treat any parse/geometry/placement warning as a failed generation
FAIL_ON_WARNINGS = False
