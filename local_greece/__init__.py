"""
Local Greece

Bilingual (English/Greek) local business directory: listings on a clustered
map, "near me" filtering, business submissions with admin review, and an AI
travel assistant.
"""

__version__ = "0.1.0"
