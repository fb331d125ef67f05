"""
Configuration Package for Media Tools.

This package centralizes the static configuration settings for the application.
Keeping the ffmpeg argument conventions, codec rules and file-type filters here
means the command builders and operations never hardcode them, and adjusting a
default does not require touching the core logic.

This package includes settings for:
- Common application settings like the logging format, the overwrite flags and
  the keywords used to recognise ffmpeg failures.
- User-overridable paths for external tools like FFmpeg (`config.user.yaml`).
- Audio codec/container compatibility rules.
- Video container extensions and the defaults of the AV1 transcode profile.
"""
