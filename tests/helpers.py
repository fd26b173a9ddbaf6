"""
Shared CODA sample lines and line-editing helpers for the test suites.
Every sample line is exactly 128 characters.
"""

INITIAL_LINE = "0000013020912605        YjeybrNhwgMichael Campbell          BBRUBEBB   03155032542                                             2"
OLD_BALANCE_LINE = "10000                                     0000000550584847241114                                                             000"
TRANSACTION_LINE = "2139660000                     0000000160483785051100000000000                                                     21031600000 0"
PURPOSE_LINE = "2268590000                                                                                                                   0 0"
TRAILER_LINE = "9               000004000000000000000000000000000000                                                                           2"


def put(line: str, start: int, text: str) -> str:
    """Overwrites line[start:start + len(text)] with text, keeping the length."""
    return line[:start] + text + line[start + len(text):]
