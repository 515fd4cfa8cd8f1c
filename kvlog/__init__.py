"""
kv-log: Command-Log Interpreter

Reads a log of textual commands (SET, GET, DEL, INCR, FLUSH), applies
each one to an in-memory key-value store and prints one reply per command.
"""

__version__ = "1.0.0"
