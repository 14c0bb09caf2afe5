"""
Interpreter and translator for RoboBASIC teaching programs.

Given a parsed Program, an Interpreter both runs it (against placeholder
sensor readings) and writes the equivalent RoboBASIC instruction listing.
"""
from .interpreter import Interpreter
