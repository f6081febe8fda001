"""
Representations Module

Python stand-ins for value kinds that have no builtin Python type.
"""

from .extended import FunctionStub, Symbol, Undefined, undefined

__all__ = [
    'FunctionStub',
    'Symbol',
    'Undefined',
    'undefined'
]
