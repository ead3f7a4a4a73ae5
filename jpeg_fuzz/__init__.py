"""
jpeg-fuzz: libFuzzer (atheris) harness for Pillow's JPEG decoder.

Verifies that process-level properties reached the worker before fuzzing,
then feeds each input to the decoder and lets every failure outside the
decoder's recognized rejections propagate to the engine as a finding.
"""

__version__ = "0.1.0"
