"""
CSP Builder - assemble, parse and explain Content-Security-Policy headers
"""

__version__ = "1.0.0"

from csp_builder.core import create_policy, explain, parse_policy, serialize

__all__ = ['create_policy', 'explain', 'parse_policy', 'serialize']
