"""
Configuration settings related to audio processing.

This module defines which containers each supported audio codec may be written
to, the defaults of the audio transcode and split operations, and the threshold
used to detect bitrates that were probably given in bits instead of kilobits.
"""

# ======================================================================================
# Codec / Container Compatibility
# ======================================================================================

# The AAC family: the native encoder and the higher quality Fraunhofer one.
AAC_CODECS = ("aac", "libfdk_aac")

# The native AAC encoder works but 'libfdk_aac' sounds noticeably better.
PREFERRED_AAC_CODEC = "libfdk_aac"

# Maps every accepted codec to the containers it may be placed in. Any codec
# missing from this table is rejected before a single file is touched.
CODEC_CONTAINERS = {
    "aac": ("m4a", "mkv"),
    "libfdk_aac": ("m4a", "mkv"),
    "mp3": ("mp3",),
    "opus": ("ogg",),
}

# Codec families whose containers cannot carry a video stream (usually cover
# art), so the video stream is dropped with '-vn'.
AUDIO_ONLY_CODEC_FAMILIES = ("aac", "opus")


# ======================================================================================
# Encoding Parameters
# ======================================================================================

DEFAULT_AUDIO_BITRATE = "320k"
DEFAULT_AUDIO_CODEC = "mp3"
DEFAULT_AUDIO_CONTAINER = "mp3"

# A bitrate without a 'k' suffix below this value is almost certainly meant in
# kilobits ("320" instead of "320k").
LOW_BITRATE_THRESHOLD = 1000

# Tag version written into MP3 files so older players can read the metadata.
ID3V2_VERSION = "3"


# ======================================================================================
# Split Output Naming
# ======================================================================================

# Subdirectory used for each disc when a release spans more than one disc.
DISC_DIR_TEMPLATE = "CD{disc}"

# File name of every split track, the extension is taken from the source file.
SPLIT_FILE_NAME_TEMPLATE = "{track:02}. {title}.{ext}"
