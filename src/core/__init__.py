"""Life-sim Core Engine

순수 규칙 계층. DB / HTTP 무관.
"""
__version__ = "0.1.0"
