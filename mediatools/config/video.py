"""
Configuration settings related to video processing.

This module defines the container extensions picked up by the video operations
and the encoder parameters of the AV1 transcode profile.
"""

# --- General Video Settings ---
# Only these containers are transcoded or have their default tracks rewritten.
VIDEO_EXTENSIONS = (".mkv", ".mp4", ".mov")

# --- Encoder Settings ---
AV1_ENCODER = "libsvtav1"
DEFAULT_PRESET = 6
DEFAULT_CRF = 30
DEFAULT_KEYFRAME_INTERVAL = 240
PIXEL_FORMAT_10BIT = "yuv420p10le"

# --- Default Track Settings ---
DEFAULT_AUDIO_STREAM = 0
DEFAULT_SUBTITLE_STREAM = 0
