"""
Output generation for the admin cascade application.
"""

from admin_cascade.output.cascade_writer import CascadeWriter

__all__ = [
    'CascadeWriter'
]
