"""
This package contains the core domain types of Media Tools.

The domain layer describes the concepts every operation shares, independently of
the command line, the filesystem walk and the external ffmpeg process. Keeping
them separate lets the command builders be pure functions over these types.

Modules:
    exceptions.py: Defines the exception hierarchy, split into configuration,
                   parse, filesystem and engine errors so that each stage can
                   decide whether an error ends the operation or the whole run.
    models.py: Immutable parameter bundles for each operation and the value
               types exchanged between traversal, command building and the
               ffmpeg invocation layer.
"""
