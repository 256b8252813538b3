"""remarkscope — load LLVM optimization remarks for browsing."""

__version__ = "0.1.0"
