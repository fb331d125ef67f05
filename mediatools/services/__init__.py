"""
Services Package for Media Tools.

This package contains the "service layer" of the application. Each module owns
one well-defined task that the operations in `mediatools.pipeline` combine:

- **File Processing Service (`file_processing_service`):**
  Lists directories in a stable order, mirrors a source tree into a destination
  tree, pairs the files of two directories and strips bracketed annotations
  from file names.

- **Timestamp Parser (`timestamp_parser`):**
  Turns the line-based timestamp list into ordered `TimestampEntry` values.

- **Command Builder (`command_builder`):**
  Translates operation parameters into ffmpeg argument lists and validates the
  parameters that must be checked before any file is processed.

- **Output Classifier (`output_classifier`):**
  Decides from ffmpeg's diagnostic output whether an invocation succeeded.
"""
