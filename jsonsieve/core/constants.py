"""
Common constants used across the jsonsieve library.
"""

# JSON escapes for the control characters that have a short form. Every other
# character below 0x20 is written as \u00XX.
CONTROL_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Markdown code fence delimiter.
FENCE = "```"
