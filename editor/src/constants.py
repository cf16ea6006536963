"""
Pixel Sprite Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Buffer and tile defaults
- Layer stack limits
- History limits
- Tool and key identifiers
- Display settings (onion skin, canvas size)
"""

# ======================================================================
# PIXEL FORMAT
# ======================================================================

# Four bytes per pixel, R,G,B,A order, row-major, top-left origin
CHANNELS = 4

# Fully transparent black (erase colour, cleared regions, revealed edges)
TRANSPARENT = (0, 0, 0, 0)

# ======================================================================
# TILE DEFAULTS
# ======================================================================

# Default grid size for new projects and tileset slicing
DEFAULT_TILE_SIZE = 32

# Tile sizes offered by the "new project" dialog
TILE_SIZE_PRESETS = [8, 16, 32, 64, 128]

# ======================================================================
# LAYERS
# ======================================================================

# Maximum number of layers in one editing session
MAX_LAYERS = 8

# Name given to the single layer created when a tile is opened
DEFAULT_LAYER_NAME = 'Layer 1'

# Opacity range (uniform alpha multiplier)
OPACITY_MIN = 0.0
OPACITY_MAX = 1.0

# ======================================================================
# SPRITE BANK
# ======================================================================

# Suffix appended to the name of a duplicated sprite
DUPLICATE_NAME_SUFFIX = '_copy'

# ======================================================================
# HISTORY MANAGEMENT
# ======================================================================

# Maximum undo depth (oldest entries evicted first)
MAX_HISTORY_ENTRIES = 50

# ======================================================================
# COLORS
# ======================================================================

DEFAULT_ACTIVE_COLOR = '#000000'

# Flood fill channel tolerance (0 = exact match)
DEFAULT_FILL_TOLERANCE = 0
FILL_TOLERANCE_MAX = 255

# ======================================================================
# DISPLAY
# ======================================================================

# Editor canvas size in screen pixels (the tile is scaled to fit)
EDITOR_DISPLAY_SIZE = 256

# Ghost (previous sprite) overlay opacity, display only
ONION_SKIN_OPACITY = 0.3

# Checkerboard behind transparent pixels
CHECKER_COLOR_DARK = (26, 26, 46)
CHECKER_COLOR_LIGHT = (15, 15, 30)
CHECKER_CELL_SIZE = 8

# ======================================================================
# TOOL DEFAULTS
# ======================================================================

DEFAULT_TOOL = 'draw'

# Rectangle tool draws an outline unless the fill modifier is held
DEFAULT_RECTANGLE_FILLED = False
