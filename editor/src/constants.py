"""
Tonie Circle Cropper - Constants and Configuration

This module contains all constant values used throughout the application:
- Scale bounds and slider resolution
- Physical print geometry (target diameter, export DPI)
- Preview viewport geometry
- Keyboard nudge steps
- Artifact encoding
"""

# ======================================================================
# SCALE CONSTRAINTS
# ======================================================================
MIN_SCALE = 0.1
MAX_SCALE = 3.0
DEFAULT_SCALE = 1.0
SCALE_STEP = 0.1  # Slider resolution

# ======================================================================
# PHYSICAL GEOMETRY
# ======================================================================
# A printed tonie circle is 40mm across. At 96 DPI that is 151px.
MM_PER_INCH = 25.4
DEFAULT_TARGET_DIAMETER_MM = 40.0
DEFAULT_EXPORT_DPI = 96

# Side of the on-screen square used for interactive positioning
DEFAULT_PREVIEW_DIAMETER_PX = 200

# ======================================================================
# OFFSET MAPPING
# ======================================================================
# 'physical': preview offsets are rescaled by output/preview so the export
#             matches what the preview shows
# 'legacy':   preview offsets are applied to the export canvas unchanged
OFFSET_MAPPING_PHYSICAL = 'physical'
OFFSET_MAPPING_LEGACY = 'legacy'
OFFSET_MAPPINGS = (OFFSET_MAPPING_PHYSICAL, OFFSET_MAPPING_LEGACY)
DEFAULT_OFFSET_MAPPING = OFFSET_MAPPING_PHYSICAL

# ======================================================================
# KEYBOARD NUDGING
# ======================================================================
# Preview pixels moved per arrow key press
ARROW_KEY_MOVE_NORMAL = 1.0
ARROW_KEY_MOVE_COARSE = 10.0  # With Shift modifier

# ======================================================================
# ARTIFACT ENCODING
# ======================================================================
ARTIFACT_FORMAT = 'PNG'
ARTIFACT_MEDIA_TYPE = 'image/png'

# ======================================================================
# CONFIG / HISTORY
# ======================================================================
CONFIG_DIR_NAME = '.tonie_cropper'
CONFIG_FILE_NAME = 'config.json'
MAX_RECENT_FILES = 10
