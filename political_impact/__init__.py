"""
Political Market Impact Analyzer

Scores how political events (elections, legislation, policy moves)
are expected to move market sectors, and measures how past events
actually did.
"""

__version__ = "1.0.0"
__author__ = "Political Market Impact"
