"""
Utilities Package for Media Tools.

Modules:
    - ffmpeg_utils.py: Runs one ffmpeg process, logs its command line and
      output, and raises when the output is classified as a failure.
    - module_updater.py: Locates the ffmpeg executable (system PATH or the
      directory configured in `config.user.yaml`) and verifies it can run.
"""
