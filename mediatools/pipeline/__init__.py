"""
This package contains the operations of Media Tools.

An operation drives one command from start to finish: it validates its
parameters, discovers the files to process, builds one ffmpeg invocation per
file and runs them one after another.
"""
