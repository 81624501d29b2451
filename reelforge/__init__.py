"""
reelforge - media rendering engine.

Still images become motion clips, narration is mixed with music, scenes are
joined with transitions, and captions are burned in with one of ~50 styles.
"""
__version__ = "0.1.0"
