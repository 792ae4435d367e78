"""
Apothecary: potion and scroll lifecycle with character mastery progression.

Characters craft potions and scrolls, consume them in full or by the dose,
or sell them into a house treasury; crafting outcomes feed a bounded
per-character mastery ledger.
"""

__version__ = "0.1.0"
