"""
Kyuubi server configuration: declared, typed and validated settings.
"""

__version__ = "1.0.0"
