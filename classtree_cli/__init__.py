"""ClassTree CLI: lexical class and component hierarchy explorer."""

__version__ = "0.3.0"
