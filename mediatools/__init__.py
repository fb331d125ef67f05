"""
Media Tools: batch transformation of media files on top of ffmpeg.

The package is split into layers:

    config/    static settings and the optional user YAML configuration
    domain/    exceptions and the value types shared by every layer
    services/  directory traversal, timestamp parsing, ffmpeg command building
               and ffmpeg output classification
    utils/     running the ffmpeg process and locating its executable
    pipeline/  one operation class per command, tying the services together
"""

__version__ = "0.1.0"
